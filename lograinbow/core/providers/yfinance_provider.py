"""
Yahoo Finance (yfinance) price history provider.

yfinance is synchronous, so the download runs in a worker thread; the
acquisition chain still awaits it before trying anything else.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pandas as pd
import yfinance as yf

from lograinbow.core.exceptions import ProviderFailure
from lograinbow.core.models import Observation
from lograinbow.core.providers.base import PriceHistoryProvider, coerce_price


class YfinanceProvider(PriceHistoryProvider):
    """Daily closes for one ticker over its whole Yahoo Finance history."""

    name = "yfinance"
    display_name = "Yahoo Finance"

    def __init__(self, ticker: str = "BTC-USD") -> None:
        self.ticker = ticker

    async def fetch_history(self) -> list[Observation]:
        try:
            frame = await asyncio.to_thread(self._download)
        except Exception as exc:
            # yfinance raises a wide mix of requests/pandas/json errors
            raise ProviderFailure(
                f"{self.display_name} request failed: {type(exc).__name__}: {exc}",
                self.name,
                details={"ticker": self.ticker},
            ) from exc

        if frame is None or frame.empty or "Close" not in frame.columns:
            raise ProviderFailure(
                f"{self.display_name} bad payload",
                self.name,
                details={"ticker": self.ticker, "reason": "no Close data"},
            )
        return self._frame_to_observations(frame)

    def _download(self) -> pd.DataFrame:
        return yf.Ticker(self.ticker).history(period="max", interval="1d", auto_adjust=False)

    @staticmethod
    def _frame_to_observations(frame: pd.DataFrame) -> list[Observation]:
        observations = []
        for index, close in frame["Close"].items():
            observations.append(Observation(timestamp=_to_utc(index), price=coerce_price(close)))
        return observations


def _to_utc(value: object) -> datetime | None:
    try:
        stamp = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(stamp):
        return None
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize(UTC)
    else:
        stamp = stamp.tz_convert(UTC)
    return stamp.to_pydatetime()
