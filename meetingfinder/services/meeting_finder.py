"""
Application services for finding shared meeting times.

The service coordinates fetching the day's events via a calendar source
adapter and delegates the actual availability calculation to the
domain-level ``MeetingQuery``. This keeps the CLI thin and improves
testability by allowing the calendar dependency to be stubbed via a simple
protocol.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Protocol, Sequence

from ..domain.meeting_query import MeetingQuery
from ..domain.models import Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the calendar source behaviour needed by the service."""

    def get_events(self, day: date) -> List[Event]:
        """Return the booked events of ``day``."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and meeting time calculation.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        meeting_query: MeetingQuery | None = None,
    ) -> None:
        self._event_source = event_source
        self._meeting_query = meeting_query or MeetingQuery()

    def find_times(
        self,
        *,
        day: date,
        attendees: Sequence[str],
        optional_attendees: Sequence[str] = (),
        duration_minutes: int,
    ) -> List[TimeRange]:
        """
        Retrieve the day's events and compute the possible meeting times.
        """
        request = MeetingRequest(
            duration=duration_minutes,
            attendees=frozenset(attendees),
            optional_attendees=frozenset(optional_attendees),
        )
        events = self.fetch_events(day)

        logger.info(
            "Searching %d-minute slots on %s for %d attendee(s) (+%d optional) across %d event(s)",
            request.duration,
            day,
            len(request.attendees),
            len(request.optional_attendees),
            len(events),
        )
        return self._meeting_query.query(events, request)

    def fetch_events(self, day: date) -> List[Event]:
        """Fetch the booked events of the requested day."""
        return list(self._event_source.get_events(day))
