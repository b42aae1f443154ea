"""Regression and band result types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RegressionCoefficients:
    """Coefficients of ``f(x) = a*x**2 + b*x + c`` fitted against ``ln(price)``."""

    a: float
    b: float
    c: float

    def evaluate(self, x: float) -> float:
        return self.a * x * x + self.b * x + self.c


@dataclass(frozen=True)
class ResidualStatistics:
    """Mean and population standard deviation of the log residuals."""

    mean: float
    std_dev: float


@dataclass(frozen=True)
class BandLegendEntry:
    """Static label and color of one band."""

    key: str
    color: str
    label: str


@dataclass(frozen=True)
class BandSet:
    """Boundary curves, one per multiplier, aligned index-for-index with a series.

    ``boundaries[k][i]`` is the value of boundary ``k`` at series index ``i``.
    For a fixed ``i`` the values never decrease as ``k`` grows, so consecutive
    boundaries delimit ``len(multipliers) - 1`` non-overlapping bands.
    """

    multipliers: tuple[float, ...]
    boundaries: tuple[tuple[float, ...], ...]

    def __len__(self) -> int:
        return len(self.boundaries)

    @property
    def band_count(self) -> int:
        return len(self.boundaries) - 1

    @property
    def length(self) -> int:
        """Number of series points each boundary covers."""
        return len(self.boundaries[0]) if self.boundaries else 0

    def at(self, index: int) -> tuple[float, ...]:
        """All boundary values at one series index, in multiplier order."""
        return tuple(curve[index] for curve in self.boundaries)

    def spans(self, index: int) -> tuple[float, ...]:
        """Band heights (upper minus lower boundary) at one series index."""
        values = self.at(index)
        return tuple(upper - lower for lower, upper in zip(values, values[1:]))

    def classify(self, index: int, price: float) -> int | None:
        """Position of the band containing ``price`` at ``index``.

        Returns ``None`` when the price lies below the lowest or above the
        highest boundary.
        """
        values = self.at(index)
        if price < values[0] or price > values[-1]:
            return None
        for position, upper in enumerate(values[1:]):
            if price <= upper:
                return position
        return None  # pragma: no cover - guarded by the range check above


__all__ = ["RegressionCoefficients", "ResidualStatistics", "BandLegendEntry", "BandSet"]
