"""
Domain-specific exception hierarchy for the meeting finder.
"""


class MeetingFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidRangeError(MeetingFinderError, ValueError):
    """Raised when a time range is constructed with invalid bounds."""


class InvalidRequestError(MeetingFinderError, ValueError):
    """Raised when a meeting request cannot describe a meeting (e.g. negative duration)."""


class CalendarDataError(MeetingFinderError):
    """Raised when calendar data cannot be read or parsed."""
