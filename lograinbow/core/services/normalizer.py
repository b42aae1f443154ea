"""Raw observation cleanup."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime
from numbers import Real

from lograinbow.core.constants import MIN_OBSERVATIONS
from lograinbow.core.exceptions import InsufficientDataError
from lograinbow.core.logging import bind
from lograinbow.core.models import Observation, Series


def is_valid_observation(observation: Observation) -> bool:
    """True when the price is a finite positive number and the timestamp an instant."""

    price = observation.price
    if isinstance(price, bool) or not isinstance(price, Real):
        return False
    if not math.isfinite(price) or price <= 0:
        return False
    return isinstance(observation.timestamp, datetime)


def _in_utc(observation: Observation) -> Observation:
    timestamp = observation.timestamp
    offset = timestamp.utcoffset()
    if offset is None:
        return replace(observation, timestamp=timestamp.replace(tzinfo=UTC))
    if offset:
        return replace(observation, timestamp=timestamp.astimezone(UTC))
    return observation


class SeriesNormalizer:
    """Filters malformed observations and orders the rest by timestamp.

    Observations sharing a timestamp are all kept.
    Naive timestamps are taken to be UTC; aware ones are converted to UTC.
    """

    def __init__(self, minimum: int = MIN_OBSERVATIONS) -> None:
        self.minimum = minimum

    def normalize(self, observations: Iterable[Observation]) -> Series:
        """Build a :class:`Series` from raw provider observations.

        Raises:
            InsufficientDataError: fewer than ``minimum`` observations survive
        """
        log = bind(component="SeriesNormalizer")

        raw = list(observations)
        valid = [observation for observation in raw if is_valid_observation(observation)]
        dropped = len(raw) - len(valid)
        if dropped:
            log.debug("Dropped {} malformed observation(s) of {}", dropped, len(raw))

        if len(valid) < self.minimum:
            raise InsufficientDataError(len(valid), self.minimum)

        utc = sorted((_in_utc(observation) for observation in valid), key=lambda observation: observation.timestamp)
        return Series(tuple(utc))
