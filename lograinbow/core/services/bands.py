"""Band boundary synthesis from a fitted trend and its residual spread."""

from __future__ import annotations

import math
from collections.abc import Sequence

from lograinbow.core.constants import DEFAULT_MULTIPLIERS
from lograinbow.core.exceptions import BandOverflowError, ConfigurationError
from lograinbow.core.models import BandSet


class BandGenerator:
    """Builds ``exp(f(i) + m * std_dev)`` for every multiplier ``m``.

    Multipliers must be strictly increasing; together with ``std_dev >= 0``
    this keeps every boundary at or above the one before it.
    """

    def __init__(self, multipliers: Sequence[float] = DEFAULT_MULTIPLIERS) -> None:
        values = tuple(float(m) for m in multipliers)
        if len(values) < 2:
            raise ConfigurationError("At least two band multipliers are required", {"multipliers": values})
        if any(lower >= upper for lower, upper in zip(values, values[1:])):
            raise ConfigurationError("Band multipliers must be strictly increasing", {"multipliers": values})
        self.multipliers = values

    def generate(self, fitted_log: Sequence[float], std_dev: float) -> BandSet:
        if std_dev < 0 or math.isnan(std_dev):
            raise ValueError(f"std_dev must be non-negative, got {std_dev}")
        boundaries = tuple(self._curve(fitted_log, multiplier, std_dev) for multiplier in self.multipliers)
        return BandSet(multipliers=self.multipliers, boundaries=boundaries)

    @staticmethod
    def _curve(fitted_log: Sequence[float], multiplier: float, std_dev: float) -> tuple[float, ...]:
        try:
            return tuple(math.exp(value + multiplier * std_dev) for value in fitted_log)
        except OverflowError as exc:
            raise BandOverflowError(multiplier, std_dev) from exc
