"""Process-wide immutable defaults: band multipliers, legend and reference events."""

from __future__ import annotations

from datetime import UTC, datetime

from lograinbow.core.models.bands import BandLegendEntry

# Asymmetric on purpose: one extra half-step above +3 sigma.
DEFAULT_MULTIPLIERS: tuple[float, ...] = (-3.0, -2.0, -1.0, 0.0, 1.0, 2.0, 3.0, 3.5)

RAINBOW_LEGEND: tuple[BandLegendEntry, ...] = (
    BandLegendEntry(key="fire_sale", color="#4575b4", label="Fire sale!"),
    BandLegendEntry(key="buy", color="#91bfdb", label="BUY!"),
    BandLegendEntry(key="accumulate", color="#a6d96a", label="Accumulate"),
    BandLegendEntry(key="cheap", color="#ffffbf", label="Still cheap"),
    BandLegendEntry(key="bubble?", color="#fee08b", label="Is this a bubble?"),
    BandLegendEntry(key="sell", color="#f46d43", label="Sell. Seriously, sell!"),
    BandLegendEntry(key="max_bubble", color="#d73027", label="Maximum bubble territory"),
)

# Bitcoin block-reward halvings
HALVINGS: tuple[datetime, ...] = (
    datetime(2012, 11, 28, tzinfo=UTC),
    datetime(2016, 7, 9, tzinfo=UTC),
    datetime(2020, 5, 11, tzinfo=UTC),
    datetime(2024, 4, 20, tzinfo=UTC),
)

MIN_OBSERVATIONS = 3

DEFAULT_PROVIDER_ORDER: tuple[str, ...] = ("coingecko", "coincap", "blockchain", "yfinance")

__all__ = [
    "DEFAULT_MULTIPLIERS",
    "RAINBOW_LEGEND",
    "HALVINGS",
    "MIN_OBSERVATIONS",
    "DEFAULT_PROVIDER_ORDER",
]
