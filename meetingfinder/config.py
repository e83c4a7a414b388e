"""
Configuration management using Pydantic Settings.

The config file names the calendar export to read, the default meeting
length and the colleagues that may be used as short aliases for attendees.
"""

import logging
from pathlib import Path
from typing import Callable, List, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import DAY_LENGTH

CONFIG_FILE_NAME = "config.yaml"


class DefaultsConfig(BaseModel):
    """Fallback values for options left out on the command line."""
    duration_minutes: int = 30

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration fits into a day."""
        if not 0 < value <= DAY_LENGTH:
            raise ValueError(f"duration_minutes must be between 1 and {DAY_LENGTH}, got {value}")
        return value


class Colleague(BaseModel):
    """A known attendee: alias, email and optional calendar export id."""
    name: str
    email: str
    calendar_id: str = ""  # Matches calendarId entries of the calendar file


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    colleagues: List[Colleague] = Field(default_factory=list)
    calendar_file: Path = Path("calendar.json")
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("colleagues")
    @classmethod
    def validate_colleagues(cls, value: List[Colleague]) -> List[Colleague]:
        """Aliases and emails identify attendees, so neither may repeat (case-insensitive)."""
        for label, key in (("name", lambda c: c.name), ("email", lambda c: c.email)):
            keys = [key(colleague).lower() for colleague in value]
            repeated = sorted({k for k in keys if keys.count(k) > 1})
            if repeated:
                raise ValueError(f"Duplicate colleague {label} detected: {', '.join(repeated)}")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read the YAML config; a relative ``calendar_file`` is taken relative to it.

        Raises:
            FileNotFoundError: If there is no config file at ``config_path``
            ValueError: If the YAML is broken or fails validation
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Copy config.example.yaml to {CONFIG_FILE_NAME} and list your colleagues there."
            )

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if not config.calendar_file.is_absolute():
            config.calendar_file = config_path.parent / config.calendar_file
        return config

    def _find_colleague(self, predicate: Callable[[Colleague], bool]) -> Colleague | None:
        return next((colleague for colleague in self.colleagues if predicate(colleague)), None)

    def find_colleague_by_name(self, name: str) -> Colleague | None:
        """Look up a colleague by alias, ignoring case."""
        alias = name.lower()
        return self._find_colleague(lambda colleague: colleague.name.lower() == alias)

    def find_colleague_by_calendar_id(self, calendar_id: str) -> Colleague | None:
        """Look up the colleague whose events carry ``calendar_id`` in calendar exports."""
        if not calendar_id:
            return None
        return self._find_colleague(lambda colleague: colleague.calendar_id == calendar_id)

    def resolve_attendee(self, identifier: str) -> str:
        """
        Turn an attendee given on the command line into the email used in events.

        Anything containing ``@`` is taken as an email; everything else must be
        a configured alias.

        Raises:
            ValueError: If ``identifier`` is neither an email nor a known alias
        """
        if "@" in identifier:
            return identifier.lower()

        colleague = self.find_colleague_by_name(identifier)
        if colleague is None:
            raise ValueError(f"Unknown attendee: '{identifier}' is neither an email nor a configured alias.")
        return colleague.email.lower()

    def resolve_attendees(self, identifiers: Sequence[str]) -> List[str]:
        """
        Resolve every attendee of a meeting, keeping first-seen order without repeats.

        All unknown aliases are reported together rather than one at a time.
        An empty sequence resolves to an empty list, since a meeting often has
        no optional attendees.
        """
        emails: List[str] = []
        unknown = set()

        for identifier in identifiers:
            try:
                email = self.resolve_attendee(identifier)
            except ValueError:
                unknown.add(identifier)
            else:
                if email not in emails:
                    emails.append(email)

        if unknown:
            raise ValueError(
                f"Unknown attendee(s): {', '.join(sorted(unknown))}. "
                "Add them to the colleagues in the config or pass their email address."
            )
        return emails


def get_default_config_path() -> Path:
    """
    Locate ``config.yaml``: the working directory first, then the project root.

    If neither exists the working-directory path is returned so the error
    message points where users expect the file.
    """
    candidates = [Path.cwd() / CONFIG_FILE_NAME, Path(__file__).parent.parent / CONFIG_FILE_NAME]
    return next((path for path in candidates if path.exists()), candidates[0])
