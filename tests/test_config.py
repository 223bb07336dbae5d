"""
Smoke tests for config / settings loading.
Run: python -m pytest tests/ -v
"""
import sys
import os
from datetime import date, datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from learning_hub.config import DashboardConfig, SmtpConfig, get_settings, _is_placeholder

_ENV_KEYS = (
    "SESSION_DB_PATH", "SESSION_KEY", "SKILL_GAP_THRESHOLD", "ACTIVE_WINDOW_DAYS",
    "AGENT_SEED", "REFERENCE_DATE", "SMTP_HOST", "SMTP_PORT", "SMTP_USER",
    "SMTP_PASS", "SMTP_FROM", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestIsPlaceholder:
    def test_empty_string_is_placeholder(self):
        assert _is_placeholder("")

    def test_angle_bracket_is_placeholder(self):
        assert _is_placeholder("<your-smtp-user>")

    def test_your_prefix_is_placeholder(self):
        assert _is_placeholder("your-password")

    def test_literal_PLACEHOLDER_is_placeholder(self):
        assert _is_placeholder("PLACEHOLDER")

    def test_real_value_not_placeholder(self):
        assert not _is_placeholder("apikey")


class TestSettingsLoading:
    def test_defaults(self, clean_env):
        s = get_settings()
        assert s.session.session_key == "learning_hub_user"
        assert s.session.db_path.endswith("learning_hub_session.db")
        assert s.dashboard.skill_gap_threshold == 70
        assert s.dashboard.active_window_days == 7
        assert s.dashboard.agent_seed is None
        assert s.dashboard.reference_date is None
        assert s.smtp.port == 587
        assert not s.smtp.is_configured
        assert s.log_level == "INFO"

    def test_overrides(self, clean_env):
        clean_env.setenv("SESSION_DB_PATH", "/tmp/x.db")
        clean_env.setenv("SKILL_GAP_THRESHOLD", "60")
        clean_env.setenv("AGENT_SEED", "42")
        clean_env.setenv("REFERENCE_DATE", "2024-01-16")
        clean_env.setenv("LOG_LEVEL", "debug")
        s = get_settings()
        assert s.session.db_path == "/tmp/x.db"
        assert s.dashboard.skill_gap_threshold == 60
        assert s.dashboard.agent_seed == 42
        assert s.dashboard.reference_date == date(2024, 1, 16)
        assert s.log_level == "DEBUG"

    def test_smtp_from_falls_back_to_user(self, clean_env):
        clean_env.setenv("SMTP_USER", "apikey")
        clean_env.setenv("SMTP_PASS", "SG.realish")
        s = get_settings()
        assert s.smtp.is_configured
        assert s.smtp.sender == "apikey"

    def test_status_summary_keys(self, clean_env):
        summary = get_settings().status_summary()
        assert set(summary) == {"Session store", "Email reminders", "Seeded agents"}
        assert "Not configured" in summary["Email reminders"]


class TestDashboardNow:
    def test_reference_date_pins_end_of_day(self):
        cfg = DashboardConfig(70, 7, None, date(2024, 1, 16))
        assert cfg.now() == datetime(2024, 1, 16, 23, 59, 59, tzinfo=timezone.utc)

    def test_without_reference_date_is_aware_utc(self):
        cfg = DashboardConfig(70, 7, None, None)
        assert cfg.now().tzinfo is not None


class TestSmtpConfig:
    def test_placeholder_credentials_not_configured(self):
        smtp = SmtpConfig("h", 587, "<your-smtp-user>", "<your-smtp-password>", "")
        assert not smtp.is_configured
