"""Price history providers."""

from lograinbow.core.providers.base import (
    HttpPriceProvider,
    PriceHistoryProvider,
    coerce_price,
    coerce_timestamp,
)
from lograinbow.core.providers.blockchain import BlockchainInfoProvider
from lograinbow.core.providers.coincap import CoinCapProvider
from lograinbow.core.providers.coingecko import CoinGeckoProvider
from lograinbow.core.providers.factory import ProviderFactory, get_provider_factory
from lograinbow.core.providers.yfinance_provider import YfinanceProvider

__all__ = [
    "PriceHistoryProvider",
    "HttpPriceProvider",
    "CoinGeckoProvider",
    "CoinCapProvider",
    "BlockchainInfoProvider",
    "YfinanceProvider",
    "ProviderFactory",
    "get_provider_factory",
    "coerce_price",
    "coerce_timestamp",
]
