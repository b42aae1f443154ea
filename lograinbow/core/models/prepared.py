"""Pipeline outputs handed to rendering consumers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

import pandas as pd

from lograinbow.core.models.bands import (
    BandLegendEntry,
    BandSet,
    RegressionCoefficients,
    ResidualStatistics,
)
from lograinbow.core.models.series import Observation

RecordMode = Literal["boundaries", "spans"]


@dataclass(frozen=True)
class AcquisitionResult:
    """Observations from the winning provider plus the failures that preceded it."""

    provider: str
    observations: tuple[Observation, ...]
    failures: tuple[Any, ...] = ()


@dataclass(frozen=True)
class PreparedRow:
    """One chart row: timestamp, observed price and every boundary value."""

    timestamp: datetime
    price: float
    boundaries: tuple[float, ...]

    @property
    def base(self) -> float:
        return self.boundaries[0]

    @property
    def spans(self) -> tuple[float, ...]:
        values = self.boundaries
        return tuple(upper - lower for lower, upper in zip(values, values[1:]))

    def as_mapping(self, mode: RecordMode = "boundaries") -> dict[str, Any]:
        """Flat mapping using ``b0..b7`` or ``base, span1..span7`` column names."""

        record: dict[str, Any] = {"timestamp": self.timestamp, "price": self.price}
        if mode == "boundaries":
            for position, value in enumerate(self.boundaries):
                record[f"b{position}"] = value
        elif mode == "spans":
            record["base"] = self.base
            for position, value in enumerate(self.spans, start=1):
                record[f"span{position}"] = value
        else:
            raise ValueError(f"Unsupported record mode '{mode}'. Use 'boundaries' or 'spans'.")
        return record


@dataclass(frozen=True)
class PreparedSeries:
    """Fully populated result of one pipeline run."""

    provider: str
    rows: tuple[PreparedRow, ...]
    coefficients: RegressionCoefficients
    residuals: ResidualStatistics
    bands: BandSet
    events: tuple[datetime, ...]
    legend: tuple[BandLegendEntry, ...]
    y_min: float
    failures: tuple[Any, ...] = field(default=(), compare=False)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def start(self) -> datetime:
        return self.rows[0].timestamp

    @property
    def end(self) -> datetime:
        return self.rows[-1].timestamp

    @property
    def latest(self) -> PreparedRow:
        return self.rows[-1]

    def current_band(self) -> BandLegendEntry | None:
        """Legend entry of the band holding the most recent price."""

        position = self.bands.classify(len(self.rows) - 1, self.latest.price)
        if position is None or position >= len(self.legend):
            return None
        return self.legend[position]

    def to_records(self, mode: RecordMode = "boundaries") -> list[dict[str, Any]]:
        return [row.as_mapping(mode) for row in self.rows]

    def to_frame(self, mode: RecordMode = "boundaries") -> pd.DataFrame:
        """Rows as a DataFrame indexed by timestamp."""

        frame = pd.DataFrame.from_records(self.to_records(mode))
        return frame.set_index("timestamp")


def minimum_y(rows: tuple[PreparedRow, ...] | list[PreparedRow]) -> float:
    """Axis floor hint: ``max(1, min(min(base, price)))`` over all rows."""

    if not rows:
        return 1.0
    return max(1.0, min(min(row.base, row.price) for row in rows))


__all__ = [
    "AcquisitionResult",
    "PreparedRow",
    "PreparedSeries",
    "RecordMode",
    "minimum_y",
]
