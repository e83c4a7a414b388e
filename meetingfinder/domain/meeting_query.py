"""
Core business logic for finding meeting times within a single day.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from typing import Iterable, List

from .models import DAY_LENGTH, START_OF_DAY, Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


def collect_unavailable(events: Iterable[Event], attendee_group: Iterable[str]) -> List[TimeRange]:
    """
    Collect the time ranges of all events attended by anyone in ``attendee_group``.

    Input order is preserved; ranges are neither sorted nor deduplicated.
    """
    group = frozenset(attendee_group)
    return [event.when for event in events if event.involves_any(group)]


def merge_intervals(ranges: Iterable[TimeRange]) -> List[TimeRange]:
    """
    Merge overlapping time ranges into a sorted list of disjoint ranges.

    Ranges that merely touch stay separate, since they share no minute:

    Example: [09:00-10:00, 09:30-11:00, 11:00-12:00]
          -> [09:00-11:00, 11:00-12:00]
    """
    # Empty ranges cover no minute and would break strict ordering by start
    sorted_ranges = sorted(r for r in ranges if r.duration > 0)
    if not sorted_ranges:
        return []

    merged: List[TimeRange] = [sorted_ranges[0]]

    for current in sorted_ranges[1:]:
        last = merged[-1]

        if last.overlaps(current):
            if not last.contains(current):
                merged[-1] = TimeRange(start=last.start, end=current.end)
        else:
            merged.append(current)

    return merged


def derive_available(busy_ranges: Iterable[TimeRange], duration: int) -> List[TimeRange]:
    """
    Turn sorted, non-overlapping busy ranges into free ranges of at least ``duration``.

    Example (duration 30):
    Busy: [10:00-11:00, 11:10-14:00]
    Result: [00:00-10:00, 14:00-24:00]   (the 10 minute gap is too short)
    """
    available: List[TimeRange] = []
    cursor = START_OF_DAY

    for busy in busy_ranges:
        if cursor < busy.start:
            gap = TimeRange(start=cursor, end=busy.start)
            if gap.duration >= duration:
                available.append(gap)
        cursor = max(cursor, busy.end)

    if cursor < DAY_LENGTH:
        gap = TimeRange(start=cursor, end=DAY_LENGTH)
        if gap.duration >= duration:
            available.append(gap)

    return available


class MeetingQuery:
    """
    Finds the times of day at which a requested meeting can take place.

    Algorithm:
    1. Collect the ranges of events that involve any relevant attendee
    2. Merge them into sorted, non-overlapping busy ranges
    3. Take the complement within the day, keeping gaps long enough to meet

    The pipeline runs first for mandatory and optional attendees together.
    Only if that leaves no slot does it run again for mandatory attendees
    alone, so optional attendees never block a meeting.
    """

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Find all slots in which the requested meeting fits.

        Args:
            events: Already booked events of the day
            request: The meeting to schedule

        Returns:
            Chronological list of free ranges, empty if the meeting cannot fit
        """
        if request.duration > DAY_LENGTH:
            logger.debug("Requested duration %d exceeds the day", request.duration)
            return []

        # Events may be a one-shot iterable and are scanned up to twice
        events = list(events)

        available = self.find_available(events, request.all_attendees, request.duration)
        if available:
            return available

        if request.optional_attendees:
            logger.debug(
                "No slot for all %d attendees, retrying without optional attendees",
                len(request.all_attendees),
            )
        return self.find_available(events, request.attendees, request.duration)

    def find_available(
        self,
        events: List[Event],
        attendees: Iterable[str],
        duration: int
    ) -> List[TimeRange]:
        """Run the collect -> merge -> complement pipeline for one attendee group."""
        unavailable = collect_unavailable(events, attendees)
        busy = merge_intervals(unavailable)
        available = derive_available(busy, duration)

        logger.debug(
            "%d event range(s) merged into %d busy range(s), %d slot(s) of >= %d min",
            len(unavailable),
            len(busy),
            len(available),
            duration,
        )
        return available


def find_meeting_times(events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
    """Convenience wrapper around :meth:`MeetingQuery.query`."""
    return MeetingQuery().query(events, request)
