"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import CalendarDataError, InvalidRangeError, InvalidRequestError, MeetingFinderError
from .meeting_query import (
    MeetingQuery,
    collect_unavailable,
    derive_available,
    find_meeting_times,
    merge_intervals,
)
from .models import (
    DAY_LENGTH,
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
    format_minute,
    minutes_of_day,
)

__all__ = [
    "CalendarDataError",
    "InvalidRangeError",
    "InvalidRequestError",
    "MeetingFinderError",
    "MeetingQuery",
    "collect_unavailable",
    "derive_available",
    "find_meeting_times",
    "merge_intervals",
    "DAY_LENGTH",
    "END_OF_DAY",
    "START_OF_DAY",
    "WHOLE_DAY",
    "Event",
    "MeetingRequest",
    "TimeRange",
    "format_minute",
    "minutes_of_day",
]
