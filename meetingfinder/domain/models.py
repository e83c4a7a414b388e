"""
Domain models for single-day meeting scheduling.

All times are integer minutes of the day on one 24-hour timeline, so
``TimeRange(540, 600)`` is 09:00 until (not including) 10:00.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .exceptions import InvalidRangeError, InvalidRequestError

DAY_LENGTH = 24 * 60
START_OF_DAY = 0
END_OF_DAY = DAY_LENGTH - 1  # Last valid minute


def minutes_of_day(hours: int, minutes: int = 0) -> int:
    """Convert a wall-clock time to minutes since midnight."""
    return hours * 60 + minutes


def format_minute(minute: int) -> str:
    """Format minutes since midnight as ``HH:MM`` (1440 renders as ``24:00``)."""
    hours, minutes = divmod(minute, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True, order=True)
class TimeRange:
    """
    Immutable half-open range ``[start, end)`` of minutes within one day.

    Invariant: 0 <= start <= end <= DAY_LENGTH. Ranges order by start, then end.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError(
                f"End minute {self.end} must not be before start minute {self.start}"
            )
        if self.start < START_OF_DAY or self.end > DAY_LENGTH:
            raise InvalidRangeError(
                f"Range [{self.start}, {self.end}) lies outside the day [0, {DAY_LENGTH})"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool = False) -> "TimeRange":
        """
        Create a range from its bounds.

        With ``inclusive=True`` the end minute itself belongs to the range,
        e.g. ``from_start_end(0, END_OF_DAY, inclusive=True)`` is the whole day.
        """
        return cls(start=start, end=end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a range that starts at ``start`` and lasts ``duration`` minutes."""
        return cls(start=start, end=start + duration)

    @property
    def duration(self) -> int:
        """Length of the range in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        """Check whether both ranges share at least one minute."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeRange") -> bool:
        """Check whether ``other`` lies entirely within this range."""
        return self.start <= other.start and other.end <= self.end

    def format_display(self) -> str:
        """
        Format the range for display.
        Format: HH:MM – HH:MM (N Min.)
        """
        return f"{format_minute(self.start)} – {format_minute(self.end)} ({self.duration} Min.)"

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


WHOLE_DAY = TimeRange(START_OF_DAY, DAY_LENGTH)


def _as_attendee_set(attendees: Iterable[str]) -> FrozenSet[str]:
    # A bare string would otherwise be split into characters
    if isinstance(attendees, str):
        return frozenset([attendees])
    return frozenset(attendees)


@dataclass(frozen=True)
class Event:
    """
    A booked calendar event: when it happens and who attends.
    """
    title: str
    when: TimeRange
    attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "attendees", _as_attendee_set(self.attendees))

    def involves_any(self, people: Iterable[str]) -> bool:
        """Check whether at least one of ``people`` attends this event."""
        return not self.attendees.isdisjoint(people)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A meeting to be scheduled.

    ``attendees`` must be able to attend; ``optional_attendees`` are included
    when a slot exists that suits everyone.
    """
    duration: int
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidRequestError(f"Meeting duration must not be negative, got {self.duration}")
        object.__setattr__(self, "attendees", _as_attendee_set(self.attendees))
        object.__setattr__(self, "optional_attendees", _as_attendee_set(self.optional_attendees))

    @property
    def all_attendees(self) -> FrozenSet[str]:
        """Mandatory and optional attendees combined."""
        return self.attendees | self.optional_attendees
