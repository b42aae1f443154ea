"""
Provider factory.

Builds the ordered provider list for the acquisition chain from
configuration. Custom providers can be registered under a new name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from loguru import logger

from lograinbow.core.config import ProviderConfig
from lograinbow.core.exceptions import ConfigurationError
from lograinbow.core.providers.base import PriceHistoryProvider
from lograinbow.core.providers.blockchain import BlockchainInfoProvider
from lograinbow.core.providers.coincap import CoinCapProvider
from lograinbow.core.providers.coingecko import CoinGeckoProvider
from lograinbow.core.providers.yfinance_provider import YfinanceProvider

ProviderBuilder = Callable[[ProviderConfig], PriceHistoryProvider]


class ProviderFactory:
    """Name-to-builder registry for price history providers."""

    def __init__(self) -> None:
        self._builders: dict[str, ProviderBuilder] = {}
        self._register_built_in_providers()

    def _register_built_in_providers(self) -> None:
        self.register(
            "coingecko",
            lambda config: CoinGeckoProvider(
                coin_id=config.coin_id,
                vs_currency=config.vs_currency,
                timeout=config.timeout,
                user_agent=config.user_agent,
            ),
        )
        self.register(
            "coincap",
            lambda config: CoinCapProvider(
                asset_id=config.coin_id,
                api_key=config.coincap_api_key,
                timeout=config.timeout,
                user_agent=config.user_agent,
            ),
        )
        self.register(
            "blockchain",
            lambda config: BlockchainInfoProvider(timeout=config.timeout, user_agent=config.user_agent),
        )
        self.register("yfinance", lambda config: YfinanceProvider(ticker=config.yfinance_ticker))

    @property
    def available(self) -> list[str]:
        return list(self._builders)

    def register(self, name: str, builder: ProviderBuilder) -> None:
        """Register (or replace) the builder for ``name``."""
        self._builders[name.lower()] = builder
        logger.debug("Registered provider builder {}", name)

    def create_provider(self, name: str, config: ProviderConfig | None = None) -> PriceHistoryProvider:
        builder = self._builders.get(name.lower())
        if builder is None:
            raise ConfigurationError(
                f"Unknown provider '{name}'. Available providers: {', '.join(self.available)}",
                {"provider": name},
            )
        return builder(config or ProviderConfig())

    def create_providers(
        self,
        config: ProviderConfig | None = None,
        names: Iterable[str] | None = None,
    ) -> list[PriceHistoryProvider]:
        """Providers in attempt order; ``names`` overrides ``config.order``."""
        config = config or ProviderConfig()
        order = list(names) if names is not None else config.order
        return [self.create_provider(name, config) for name in order]


_factory: ProviderFactory | None = None


def get_provider_factory() -> ProviderFactory:
    """Return the process-wide provider factory."""
    global _factory
    if _factory is None:
        _factory = ProviderFactory()
    return _factory
