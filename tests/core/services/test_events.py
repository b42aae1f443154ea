"""Tests for reference event selection."""

from datetime import UTC, datetime

from lograinbow.core.constants import HALVINGS
from lograinbow.core.services import EventFilter


def test_event_equal_to_last_timestamp_is_included() -> None:
    last = HALVINGS[3]

    events = EventFilter().within(datetime(2019, 1, 1, tzinfo=UTC), last)

    assert events == (HALVINGS[2], HALVINGS[3])


def test_event_equal_to_first_timestamp_is_included() -> None:
    events = EventFilter().within(HALVINGS[0], datetime(2013, 1, 1, tzinfo=UTC))

    assert events == (HALVINGS[0],)


def test_range_without_events() -> None:
    start = datetime(2017, 1, 1, tzinfo=UTC)
    end = datetime(2019, 12, 31, tzinfo=UTC)

    assert EventFilter().within(start, end) == ()


def test_custom_events_keep_reference_order() -> None:
    later = datetime(2021, 6, 1, tzinfo=UTC)
    earlier = datetime(2021, 1, 1, tzinfo=UTC)

    events = EventFilter([later, earlier]).within(datetime(2020, 1, 1, tzinfo=UTC), datetime(2022, 1, 1, tzinfo=UTC))

    assert events == (later, earlier)


def test_naive_custom_events_are_read_as_utc() -> None:
    event_filter = EventFilter([datetime(2021, 1, 1)])

    events = event_filter.within(datetime(2020, 1, 1, tzinfo=UTC), datetime(2022, 1, 1, tzinfo=UTC))

    assert events == (datetime(2021, 1, 1, tzinfo=UTC),)
