"""
Tests for the SQLite session store and its versioned envelope.
"""
import json
import sqlite3

import pytest

from factories import make_user

from learning_hub.session_store import (
    SCHEMA_VERSION,
    SessionFormatError,
    SessionStore,
    SessionStoreError,
)


@pytest.fixture
def user():
    return make_user("alice", role="manager", employees=["bob"]).to_public()


class TestEnvelope:
    def test_save_writes_versioned_envelope(self, store, user):
        store.save(user)
        envelope = json.loads(store.raw())
        assert envelope["schema_version"] == SCHEMA_VERSION
        assert envelope["user"]["username"] == "alice"
        assert envelope["user"]["role"] == "manager"
        assert "saved_at" in envelope

    def test_round_trip(self, store, user):
        store.save(user)
        assert store.load() == user

    def test_save_overwrites(self, store, user):
        store.save(user)
        other = make_user("carol").to_public()
        store.save(other)
        assert store.load() == other

    def test_table_layout(self, store, user):
        store.save(user)
        conn = sqlite3.connect(store.db_path)
        rows = conn.execute("SELECT key, value, updated_at FROM kv_store").fetchall()
        conn.close()
        assert len(rows) == 1
        assert rows[0][0] == "learning_hub_user"
        assert rows[0][2]


class TestLoadFailures:
    def test_absent_key_is_none(self, store):
        assert store.load() is None

    def test_invalid_json(self, store):
        store.write_raw("not-json")
        with pytest.raises(SessionFormatError, match="not valid JSON"):
            store.load()

    def test_non_object(self, store):
        store.write_raw("[1, 2, 3]")
        with pytest.raises(SessionFormatError):
            store.load()

    def test_bare_user_without_envelope(self, store, user):
        store.write_raw(json.dumps(user.model_dump(mode="json")))
        with pytest.raises(SessionFormatError, match="schema_version"):
            store.load()

    def test_future_version(self, store, user):
        store.write_raw(json.dumps({"schema_version": SCHEMA_VERSION + 1,
                                    "user": user.model_dump(mode="json")}))
        with pytest.raises(SessionFormatError):
            store.load()

    def test_malformed_user(self, store):
        store.write_raw(json.dumps({"schema_version": SCHEMA_VERSION,
                                    "user": {"username": "x", "role": "wizard"}}))
        with pytest.raises(SessionFormatError, match="malformed"):
            store.load()

    def test_format_error_is_store_error(self):
        assert issubclass(SessionFormatError, SessionStoreError)


class TestClearAndKeys:
    def test_clear_is_idempotent(self, store, user):
        store.save(user)
        store.clear()
        store.clear()
        assert store.raw() is None

    def test_keys_are_independent(self, tmp_path, user):
        path = str(tmp_path / "shared.db")
        a = SessionStore(path, key="a")
        b = SessionStore(path, key="b")
        a.save(user)
        assert b.load() is None
        b.save(make_user("dave").to_public())
        a.clear()
        assert b.load().username == "dave"


class _FailingConn:
    """Wraps a real connection; execute() fails, close() is recorded."""

    def __init__(self, conn):
        self._conn = conn
        self.closed = False

    def execute(self, *args):
        raise sqlite3.OperationalError("disk I/O error")

    def commit(self):
        self._conn.commit()

    def close(self):
        self.closed = True
        self._conn.close()


class TestConnectionsClosed:
    def test_connection_closed_when_write_fails(self, store, user, monkeypatch):
        opened = []
        real_get_conn = store._get_conn

        def failing_conn():
            conn = _FailingConn(real_get_conn())
            opened.append(conn)
            return conn

        monkeypatch.setattr(store, "_get_conn", failing_conn)
        with pytest.raises(sqlite3.OperationalError):
            store.save(user)
        with pytest.raises(sqlite3.OperationalError):
            store.clear()
        with pytest.raises(sqlite3.OperationalError):
            store.raw()
        assert len(opened) == 3
        assert all(conn.closed for conn in opened)

    def test_store_usable_after_failed_write(self, store, user, monkeypatch):
        real_get_conn = store._get_conn
        monkeypatch.setattr(store, "_get_conn", lambda: _FailingConn(real_get_conn()))
        with pytest.raises(sqlite3.OperationalError):
            store.save(user)
        monkeypatch.undo()
        assert store.raw() is None
        store.save(user)
        assert store.load() == user
