"""Price observations and the normalized series built from them."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Observation:
    """One raw (timestamp, price) pair as produced by a provider.

    Either field may be malformed: ``timestamp`` is ``None`` when the provider
    value could not be read as an instant, and ``price`` may be NaN, infinite
    or non-positive.
    """

    timestamp: datetime | None
    price: float


@dataclass(frozen=True)
class Series(Sequence[Observation]):
    """Clean, time-ordered observations.

    Built by :class:`~lograinbow.core.services.normalizer.SeriesNormalizer`;
    every timestamp is valid, every price is finite and positive and the
    timestamps are non-decreasing.
    """

    observations: tuple[Observation, ...]

    def __len__(self) -> int:
        return len(self.observations)

    def __getitem__(self, index):  # type: ignore[override]
        return self.observations[index]

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    @property
    def prices(self) -> tuple[float, ...]:
        return tuple(observation.price for observation in self.observations)

    @property
    def timestamps(self) -> tuple[datetime, ...]:
        return tuple(observation.timestamp for observation in self.observations)  # type: ignore[misc]

    @property
    def first(self) -> Observation:
        return self.observations[0]

    @property
    def last(self) -> Observation:
        return self.observations[-1]


__all__ = ["Observation", "Series"]
