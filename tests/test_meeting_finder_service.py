"""
Tests for the MeetingFinderService orchestration layer.
"""

from datetime import date
from typing import Dict, List

import pytest

from meetingfinder.domain.exceptions import InvalidRequestError
from meetingfinder.domain.models import DAY_LENGTH, WHOLE_DAY, Event, TimeRange
from meetingfinder.services.meeting_finder import MeetingFinderService

DAY = date(2024, 11, 25)


class StubEventSource:
    """Minimal stub matching EventSourceProtocol."""

    def __init__(self, events_by_day: Dict[date, List[Event]]):
        self._events_by_day = events_by_day
        self.calls: List[date] = []

    def get_events(self, day):
        self.calls.append(day)
        return self._events_by_day.get(day, [])


def test_fetch_events_for_requested_day():
    """Only the requested day should be fetched."""
    events = [Event("Chess", TimeRange(600, 720), {"a@example.com"})]
    source = StubEventSource({DAY: events})
    service = MeetingFinderService(event_source=source)

    assert service.fetch_events(DAY) == events
    assert source.calls == [DAY]


def test_find_times_uses_events_and_query():
    """End-to-end call should yield computed meeting times."""
    events = [
        Event("Chess", TimeRange(660, 720), {"a@example.com"}),
        Event("Other team", TimeRange(0, 600), {"z@example.com"}),
    ]
    service = MeetingFinderService(event_source=StubEventSource({DAY: events}))

    slots = service.find_times(
        day=DAY,
        attendees=["a@example.com", "b@example.com"],
        duration_minutes=30,
    )

    assert slots == [TimeRange(0, 660), TimeRange(720, DAY_LENGTH)]


def test_find_times_drops_blocking_optional_attendee():
    events = [
        Event("Chess", TimeRange(660, 720), {"a@example.com"}),
        Event("Vacation", WHOLE_DAY, {"b@example.com"}),
    ]
    service = MeetingFinderService(event_source=StubEventSource({DAY: events}))

    slots = service.find_times(
        day=DAY,
        attendees=["a@example.com"],
        optional_attendees=["b@example.com"],
        duration_minutes=30,
    )

    assert slots == [TimeRange(0, 660), TimeRange(720, DAY_LENGTH)]


def test_find_times_on_empty_day():
    service = MeetingFinderService(event_source=StubEventSource({}))

    slots = service.find_times(day=DAY, attendees=["a@example.com"], duration_minutes=60)

    assert slots == [WHOLE_DAY]


def test_find_times_rejects_negative_duration():
    service = MeetingFinderService(event_source=StubEventSource({}))

    with pytest.raises(InvalidRequestError):
        service.find_times(day=DAY, attendees=["a@example.com"], duration_minutes=-5)
