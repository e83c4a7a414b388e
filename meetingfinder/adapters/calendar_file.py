"""
Calendar source backed by a JSON or YAML calendar export.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List

import pendulum
import yaml
from pendulum import DateTime

from ..domain.exceptions import CalendarDataError, InvalidRangeError
from ..domain.models import DAY_LENGTH, Event, TimeRange, minutes_of_day

if TYPE_CHECKING:
    from ..config import AppConfig

logger = logging.getLogger(__name__)


class CalendarFileSource:
    """
    Loads booked events for a single day from a calendar export file.

    Each entry looks like::

        {"title": "Chess", "start": "2024-11-25T10:00:00",
         "end": "2024-11-25T12:00:00", "attendees": ["a@example.com"]}

    Instead of ``attendees`` an entry may carry a ``calendarId`` (the format
    of mock calendar exports); it is mapped to the email of the colleague
    configured with that calendar id.
    """

    def __init__(self, path: Path, config: "AppConfig | None" = None):
        """
        Initialize the source.

        Args:
            path: JSON (``.json``) or YAML (``.yaml``/``.yml``) calendar file
            config: Optional AppConfig for calendar_id mapping
        """
        self.path = Path(path)
        self.config = config
        self._entries: List[Dict[str, Any]] | None = None

    def _load_entries(self) -> List[Dict[str, Any]]:
        """Read the calendar file once and cache its entries."""
        if self._entries is not None:
            return self._entries

        if not self.path.exists():
            raise CalendarDataError(f"Calendar file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or []
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise CalendarDataError(f"Could not read calendar file {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("events", [])
        if not isinstance(data, list):
            raise CalendarDataError("Calendar file must contain a list of events.")

        self._entries = data
        return data

    def get_events(self, day: date) -> List[Event]:
        """
        Load the events that take place on ``day``.

        Events crossing midnight are clipped to the day. Malformed entries
        are skipped with a warning.

        Args:
            day: The day to schedule on

        Returns:
            List of Event objects for that day
        """
        events: List[Event] = []

        for index, entry in enumerate(self._load_entries()):
            try:
                event = self._parse_entry(entry, day)
            except (KeyError, TypeError, ValueError) as exc:
                # InvalidRangeError is a ValueError as well
                logger.warning("Skipping calendar entry #%d: %s", index, exc)
                continue

            if event is not None:
                events.append(event)

        logger.debug("Loaded %d event(s) for %s from %s", len(events), day, self.path)
        return events

    def _parse_entry(self, entry: Dict[str, Any], day: date) -> Event | None:
        """Convert one raw entry into an Event, or None if it is not on ``day``."""
        start = self._parse_datetime(entry["start"])
        end = self._parse_datetime(entry["end"])

        if end < start:
            raise InvalidRangeError(f"Event ends before it starts: {entry['start']} - {entry['end']}")

        start_minute = self._minute_on_day(start, day)
        end_minute = self._minute_on_day(end, day, round_up=True)

        # Event does not touch this day
        if end_minute <= 0 or start_minute >= DAY_LENGTH:
            return None

        return Event(
            title=str(entry.get("title", "")),
            when=TimeRange(start=start_minute, end=end_minute),
            attendees=self._attendees_for(entry),
        )

    def _attendees_for(self, entry: Dict[str, Any]) -> List[str]:
        if "attendees" in entry:
            attendees = entry["attendees"] or []
            if isinstance(attendees, str):
                attendees = [attendees]
            return [str(attendee).lower() for attendee in attendees]

        calendar_id = entry.get("calendarId")
        if not calendar_id:
            return []

        if self.config is not None:
            colleague = self.config.find_colleague_by_calendar_id(calendar_id)
            if colleague:
                return [colleague.email.lower()]

        # Fallback: use calendar_id as attendee identifier
        return [str(calendar_id).lower()]

    @staticmethod
    def _minute_on_day(dt: DateTime, day: date, round_up: bool = False) -> int:
        """
        Minutes since the start of ``day``, clamped to [0, DAY_LENGTH].

        Seconds are dropped unless ``round_up`` is set, in which case a partly
        used minute counts as taken. Event ends use it so that no slot starts
        before the event is over.
        """
        if dt.date() < day:
            return 0
        if dt.date() > day:
            return DAY_LENGTH
        minute = minutes_of_day(dt.hour, dt.minute)
        if round_up and (dt.second or dt.microsecond):
            minute += 1
        return min(minute, DAY_LENGTH)

    @staticmethod
    def _parse_datetime(value: Any) -> DateTime:
        """
        Parse an ISO 8601 value to a pendulum DateTime.

        YAML already turns unquoted timestamps into datetime objects.
        """
        if isinstance(value, datetime):
            return pendulum.instance(value)

        dt = pendulum.parse(str(value))
        if isinstance(dt, DateTime):
            return dt

        raise ValueError(f"Could not parse datetime: {value}")
