"""Blockchain.info market-price chart provider."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from lograinbow.core.models import Observation
from lograinbow.core.providers.base import HttpPriceProvider, coerce_price, coerce_timestamp

BLOCKCHAIN_CHART_URL = "https://api.blockchain.info/charts/market-price"


class BlockchainChart(BaseModel):
    """Chart envelope; rows are ``{x: epoch_seconds, y: price}``."""

    values: list[dict[str, Any]]


class BlockchainInfoProvider(HttpPriceProvider):
    """Bitcoin USD market price from Blockchain.info. Bitcoin only."""

    name = "blockchain"
    display_name = "Blockchain.info"
    payload_model = BlockchainChart

    def build_url(self) -> str:
        return BLOCKCHAIN_CHART_URL

    def build_params(self) -> dict[str, Any]:
        return {"format": "json", "cors": "true"}

    def to_observations(self, payload: BlockchainChart) -> list[Observation]:
        return [
            Observation(
                timestamp=coerce_timestamp(value.get("x"), unit="s"),
                price=coerce_price(value.get("y")),
            )
            for value in payload.values
        ]
