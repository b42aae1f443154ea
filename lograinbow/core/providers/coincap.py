"""CoinCap asset-history provider."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from lograinbow.core.models import Observation
from lograinbow.core.providers.base import HttpPriceProvider, coerce_price, coerce_timestamp

COINCAP_BASE_URL = "https://api.coincap.io/v2"
# 2013-04-28T00:00:00Z, earliest day CoinCap serves
COINCAP_HISTORY_START_MS = 1367107200000


class CoinCapHistory(BaseModel):
    """``/assets/{id}/history`` envelope; rows carry ``time`` (ms) and ``priceUsd``."""

    data: list[dict[str, Any]]


class CoinCapProvider(HttpPriceProvider):
    """Daily (``d1``) history from CoinCap, from 2013-04-28 to now."""

    name = "coincap"
    display_name = "CoinCap"
    payload_model = CoinCapHistory

    def __init__(
        self,
        asset_id: str = "bitcoin",
        api_key: str | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.asset_id = asset_id
        self.api_key = api_key
        self._clock = clock or (lambda: datetime.now(UTC))

    def build_url(self) -> str:
        return f"{COINCAP_BASE_URL}/assets/{self.asset_id}/history"

    def build_params(self) -> dict[str, Any]:
        end_ms = int(self._clock().timestamp() * 1000)
        return {"interval": "d1", "start": COINCAP_HISTORY_START_MS, "end": end_ms}

    def build_headers(self) -> dict[str, str]:
        headers = super().build_headers()
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def to_observations(self, payload: CoinCapHistory) -> list[Observation]:
        return [
            Observation(
                timestamp=coerce_timestamp(row.get("time"), unit="ms"),
                price=coerce_price(row.get("priceUsd")),
            )
            for row in payload.data
        ]
