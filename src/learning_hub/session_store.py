"""
learning_hub/session_store.py — SQLite persistence for the active session
=========================================================================
Holds the one piece of state that survives a restart: the signed-in user.
It is stored as a single key/value row so the file stays trivially
portable (copy one .db file to move a session between machines).

Envelope format
---------------
The value is JSON text wrapped in a versioned envelope::

    {"schema_version": 1, "saved_at": "2024-01-15T10:30:00+00:00",
     "user": {"username": "...", "role": "...", ...}}

Reading an envelope with a different (or missing) ``schema_version``, text
that is not JSON, or a user payload that fails validation raises
SessionFormatError.  Only a missing key means "no session".

Table schema
------------
  key         TEXT PRIMARY KEY — e.g. "learning_hub_user"
  value       TEXT NOT NULL    — JSON envelope
  updated_at  TEXT             — ISO-8601 timestamp

Public API
----------
  SessionStore(db_path, key)
  store.save(user)        persist a PublicUser
  store.load()            → PublicUser | None   (raises SessionFormatError)
  store.clear()           delete the persisted entry (idempotent)
  store.raw()             → str | None          (debug / admin view)
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from learning_hub.models import PublicUser

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class SessionStoreError(Exception):
    """Base class for session persistence failures."""


class SessionFormatError(SessionStoreError):
    """The persisted session exists but cannot be read as this version's envelope."""


class SessionStore:
    """Key/value store for one persisted session record."""

    def __init__(self, db_path: str, key: str = "learning_hub_user") -> None:
        self.db_path = db_path
        self.key = key
        self._init_db()

    # ── Connection helpers ───────────────────────────────────────────────────

    def _get_conn(self) -> sqlite3.Connection:
        """Return a connection with row_factory set."""
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Create the kv table if it doesn't exist."""
        with closing(self._get_conn()) as conn:
            conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key         TEXT PRIMARY KEY,
                value       TEXT NOT NULL,
                updated_at  TEXT DEFAULT (datetime('now'))
            );
            """)
            conn.commit()

    # ── Raw access ───────────────────────────────────────────────────────────

    def raw(self) -> Optional[str]:
        """Return the stored text for this store's key, or None."""
        with closing(self._get_conn()) as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (self.key,)
            ).fetchone()
        return None if row is None else row["value"]

    def write_raw(self, value: str) -> None:
        """Store *value* verbatim under this store's key."""
        with closing(self._get_conn()) as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self.key, value),
            )
            conn.commit()

    # ── Session envelope ─────────────────────────────────────────────────────

    def save(self, user: PublicUser) -> None:
        """Persist *user* inside a versioned envelope."""
        envelope = {
            "schema_version": SCHEMA_VERSION,
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "user": user.model_dump(mode="json"),
        }
        self.write_raw(json.dumps(envelope))
        logger.debug("Session saved for %s", user.username)

    def load(self) -> Optional[PublicUser]:
        """Return the persisted user, None when nothing is stored."""
        text = self.raw()
        if text is None:
            return None

        try:
            envelope = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SessionFormatError(f"Stored session is not valid JSON: {exc}") from exc

        if not isinstance(envelope, dict):
            raise SessionFormatError("Stored session is not a JSON object")

        version = envelope.get("schema_version")
        if version != SCHEMA_VERSION:
            raise SessionFormatError(
                f"Stored session schema_version={version!r}, expected {SCHEMA_VERSION}"
            )

        try:
            return PublicUser.model_validate(envelope.get("user"))
        except ValidationError as exc:
            raise SessionFormatError(f"Stored session user is malformed: {exc}") from exc

    def clear(self) -> None:
        """Delete the persisted session (no-op when nothing is stored)."""
        with closing(self._get_conn()) as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (self.key,))
            conn.commit()
