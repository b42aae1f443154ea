"""Reference event selection."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from lograinbow.core.constants import HALVINGS


class EventFilter:
    """Keeps reference instants inside an observed time range (bounds inclusive).

    Naive event instants are taken to be UTC, matching the normalized series.
    """

    def __init__(self, events: Sequence[datetime] = HALVINGS) -> None:
        self.events = tuple(event if event.tzinfo else event.replace(tzinfo=UTC) for event in events)

    def within(self, start: datetime, end: datetime) -> tuple[datetime, ...]:
        return tuple(event for event in self.events if start <= event <= end)
