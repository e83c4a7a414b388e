"""
Tests for configuration loading and attendee resolution.
"""

import pytest

from meetingfinder.config import AppConfig, Colleague, DefaultsConfig


def _config() -> AppConfig:
    return AppConfig(
        colleagues=[
            Colleague(name="alice", email="Alice@Example.com", calendar_id="cal-alice"),
            Colleague(name="bob", email="bob@example.com"),
        ]
    )


class TestDefaultsConfig:
    """Tests for DefaultsConfig."""

    def test_default_duration(self):
        assert DefaultsConfig().duration_minutes == 30

    @pytest.mark.parametrize("value", [0, -10, 1441])
    def test_invalid_duration(self, value):
        with pytest.raises(ValueError, match="duration_minutes"):
            DefaultsConfig(duration_minutes=value)


class TestAppConfig:
    """Tests for AppConfig."""

    def test_load_from_yaml(self, tmp_path):
        """Test loading a config file and resolving the calendar path."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "defaults:\n"
            "  duration_minutes: 45\n"
            "calendar_file: data/calendar.json\n"
            "log_level: debug\n"
            "colleagues:\n"
            "  - name: alice\n"
            "    email: alice@example.com\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.defaults.duration_minutes == 45
        assert config.calendar_file == tmp_path / "data" / "calendar.json"
        assert config.log_level == "DEBUG"
        assert config.colleagues[0].name == "alice"

    def test_absolute_calendar_path_is_kept(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        calendar = tmp_path / "elsewhere" / "calendar.json"
        config_path.write_text(f"calendar_file: {calendar}\n", encoding="utf-8")

        assert AppConfig.load_from_yaml(config_path).calendar_file == calendar

    def test_empty_file_uses_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("", encoding="utf-8")

        config = AppConfig.load_from_yaml(config_path)

        assert config.defaults.duration_minutes == 30
        assert config.colleagues == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("colleagues: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_non_mapping_root(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(config_path)

    def test_unknown_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            AppConfig(log_level="LOUD")

    def test_duplicate_colleague_names(self):
        with pytest.raises(ValueError, match="Duplicate colleague name"):
            AppConfig(
                colleagues=[
                    Colleague(name="alice", email="a1@example.com"),
                    Colleague(name="Alice", email="a2@example.com"),
                ]
            )

    def test_duplicate_report_lists_every_repeated_alias(self):
        with pytest.raises(ValueError, match="alice, bob"):
            AppConfig(
                colleagues=[
                    Colleague(name="bob", email="b1@example.com"),
                    Colleague(name="Alice", email="a1@example.com"),
                    Colleague(name="BOB", email="b2@example.com"),
                    Colleague(name="alice", email="a2@example.com"),
                ]
            )

    def test_duplicate_colleague_emails(self):
        with pytest.raises(ValueError, match="Duplicate colleague email"):
            AppConfig(
                colleagues=[
                    Colleague(name="alice", email="a@example.com"),
                    Colleague(name="alicia", email="A@example.com"),
                ]
            )


class TestAttendeeResolution:
    """Tests for resolving aliases and emails."""

    def test_resolve_alias(self):
        assert _config().resolve_attendee("ALICE") == "alice@example.com"

    def test_resolve_email(self):
        assert _config().resolve_attendee("Carol@Example.com") == "carol@example.com"

    def test_resolve_unknown_alias(self):
        with pytest.raises(ValueError, match="Unknown attendee"):
            _config().resolve_attendee("mallory")

    def test_resolve_attendees_deduplicates(self):
        resolved = _config().resolve_attendees(["alice", "alice@example.com", "bob"])

        assert resolved == ["alice@example.com", "bob@example.com"]

    def test_resolve_attendees_empty(self):
        assert _config().resolve_attendees([]) == []

    def test_resolve_attendees_reports_all_unknown(self):
        with pytest.raises(ValueError, match="mallory, trent"):
            _config().resolve_attendees(["trent", "alice", "mallory"])

    def test_find_colleague_by_calendar_id(self):
        config = _config()

        assert config.find_colleague_by_calendar_id("cal-alice").name == "alice"
        assert config.find_colleague_by_calendar_id("") is None
        assert config.find_colleague_by_calendar_id("cal-bob") is None

    def test_find_colleague_by_name_ignores_case(self):
        config = _config()

        assert config.find_colleague_by_name("Bob").email == "bob@example.com"
        assert config.find_colleague_by_name("carol") is None
