"""
config.py — Central settings for the Learning Hub dashboard
===========================================================
All configuration is loaded from environment variables / .env file.
Copy .env.example → .env and override what you need; every value has a
working default so the dashboard runs with no .env at all.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)

# Session database lives next to the workspace root by default
_ROOT_DIR = Path(__file__).resolve().parent.parent.parent
_DEFAULT_DB_PATH = _ROOT_DIR / "learning_hub_session.db"


# ─── Helpers ────────────────────────────────────────────────────────────────

def _is_placeholder(value: str) -> bool:
    """Return True if the value looks like an unfilled template placeholder."""
    return not value or "<" in value or value.startswith("your-") or value == "PLACEHOLDER"


# ─── Session persistence ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SessionConfig:
    db_path:     str
    session_key: str


# ─── Dashboard thresholds ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DashboardConfig:
    skill_gap_threshold: int            # score below this is a skill gap
    active_window_days:  int            # "active" = seen within this many days
    agent_seed:          Optional[int]  # None → agents use fresh randomness
    reference_date:      Optional[date] # None → use today for activity checks

    def now(self) -> datetime:
        """Return the instant activity checks are measured against (UTC)."""
        if self.reference_date is None:
            return datetime.now(timezone.utc)
        return datetime(
            self.reference_date.year, self.reference_date.month, self.reference_date.day,
            23, 59, 59, tzinfo=timezone.utc,
        )


# ─── SMTP (manager reminders) ────────────────────────────────────────────────

@dataclass(frozen=True)
class SmtpConfig:
    host:      str
    port:      int
    user:      str
    password:  str
    sender:    str

    @property
    def is_configured(self) -> bool:
        return (
            bool(self.user)
            and bool(self.password)
            and not _is_placeholder(self.user)
            and not _is_placeholder(self.password)
        )


# ─── Master settings object ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    session:    SessionConfig
    dashboard:  DashboardConfig
    smtp:       SmtpConfig
    log_level:  str

    def status_summary(self) -> dict[str, str]:
        """Return a dict of service → status badge for the UI."""
        def badge(ok: bool) -> str:
            return "🟢 Configured" if ok else "⚪ Not configured"

        return {
            "Session store":   badge(bool(self.session.db_path)),
            "Email reminders": badge(self.smtp.is_configured),
            "Seeded agents":   badge(self.dashboard.agent_seed is not None),
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    _str  = lambda k, d="": os.getenv(k, d).strip()
    _int  = lambda k, d=0: int(os.getenv(k, str(d)) or d)

    seed_raw = _str("AGENT_SEED")
    ref_raw  = _str("REFERENCE_DATE")

    return Settings(
        session=SessionConfig(
            db_path     = _str("SESSION_DB_PATH", str(_DEFAULT_DB_PATH)),
            session_key = _str("SESSION_KEY", "learning_hub_user"),
        ),
        dashboard=DashboardConfig(
            skill_gap_threshold = _int("SKILL_GAP_THRESHOLD", 70),
            active_window_days  = _int("ACTIVE_WINDOW_DAYS", 7),
            agent_seed          = int(seed_raw) if seed_raw else None,
            reference_date      = date.fromisoformat(ref_raw) if ref_raw else None,
        ),
        smtp=SmtpConfig(
            host     = _str("SMTP_HOST", "smtp.sendgrid.net"),
            port     = _int("SMTP_PORT", 587),
            user     = _str("SMTP_USER"),
            password = _str("SMTP_PASS"),
            sender   = _str("SMTP_FROM") or _str("SMTP_USER"),
        ),
        log_level = _str("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL to the root logger (idempotent)."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
