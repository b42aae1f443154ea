"""CoinGecko market-chart provider."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from lograinbow.core.models import Observation
from lograinbow.core.providers.base import HttpPriceProvider, coerce_price, coerce_timestamp

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoMarketChart(BaseModel):
    """``/coins/{id}/market_chart`` envelope; rows are ``[epoch_ms, price]``."""

    prices: list[list[Any]]


class CoinGeckoProvider(HttpPriceProvider):
    """Full daily history from CoinGecko (``days=max``)."""

    name = "coingecko"
    display_name = "CoinGecko"
    payload_model = CoinGeckoMarketChart

    def __init__(self, coin_id: str = "bitcoin", vs_currency: str = "usd", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.coin_id = coin_id
        self.vs_currency = vs_currency

    def build_url(self) -> str:
        return f"{COINGECKO_BASE_URL}/coins/{self.coin_id}/market_chart"

    def build_params(self) -> dict[str, Any]:
        return {"vs_currency": self.vs_currency, "days": "max"}

    def to_observations(self, payload: CoinGeckoMarketChart) -> list[Observation]:
        observations = []
        for row in payload.prices:
            if len(row) < 2:
                observations.append(Observation(timestamp=None, price=coerce_price(None)))
                continue
            observations.append(
                Observation(timestamp=coerce_timestamp(row[0], unit="ms"), price=coerce_price(row[1]))
            )
        return observations
