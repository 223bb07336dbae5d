"""
Tests for AuthManager and role-based view routing.
Run: python -m pytest tests/ -v
"""
import json
import sqlite3

import pytest

from factories import make_user

from learning_hub.auth import (
    AuthManager,
    View,
    available_views,
    default_view,
    resolve_view,
)
from learning_hub.mock_data import USERS
from learning_hub.models import Role
from learning_hub.session_store import SessionFormatError, SessionStore


# ─── login ────────────────────────────────────────────────────────────────────

class TestLogin:
    @pytest.mark.parametrize("record", USERS, ids=lambda u: u.username)
    def test_every_table_entry_can_sign_in(self, auth, record):
        assert auth.login(record.username, record.password) is True
        assert auth.user == record.to_public()

    @pytest.mark.parametrize("record", USERS, ids=lambda u: u.username)
    def test_session_never_carries_password(self, auth, store, record):
        auth.login(record.username, record.password)
        assert "password" not in auth.user.model_dump()
        assert "password" not in json.loads(store.raw())["user"]

    def test_employee_login_keeps_manager_link(self, auth):
        auth.login("emp1", "emp123")
        assert auth.user.role == Role.EMPLOYEE
        assert auth.user.manager == "manager1"

    def test_manager_login_keeps_reports(self, auth):
        auth.login("manager1", "manager123")
        assert auth.user.employees == ["emp1", "emp2", "emp3"]

    def test_wrong_password_fails(self, auth):
        assert auth.login("emp1", "wrong") is False
        assert auth.user is None
        assert not auth.is_authenticated

    def test_unknown_user_fails(self, auth):
        assert auth.login("nobody", "emp123") is False

    def test_lookup_is_case_sensitive(self, auth):
        assert auth.login("EMP1", "emp123") is False
        assert auth.login("emp1", "EMP123") is False

    def test_failed_login_leaves_existing_session(self, auth, store):
        auth.login("emp1", "emp123")
        before_user, before_raw = auth.user, store.raw()
        assert auth.login("emp1", "nope") is False
        assert auth.user == before_user
        assert store.raw() == before_raw

    def test_second_login_replaces_session(self, auth):
        auth.login("emp1", "emp123")
        auth.login("admin1", "admin123")
        assert auth.current_user().username == "admin1"

    def test_uses_injected_table(self, store):
        mgr = AuthManager([make_user("solo", password="secret")], store)
        assert mgr.login("solo", "secret")
        assert not mgr.login("emp1", "emp123")


# ─── logout ───────────────────────────────────────────────────────────────────

class TestLogout:
    def test_clears_session_and_store(self, auth, store):
        auth.login("emp1", "emp123")
        auth.logout()
        assert auth.user is None
        assert store.raw() is None

    def test_logout_twice_is_same_as_once(self, auth, store):
        auth.login("emp1", "emp123")
        auth.logout()
        auth.logout()
        assert auth.user is None
        assert store.raw() is None

    def test_logout_without_session(self, auth, store):
        auth.logout()
        assert auth.user is None
        assert store.raw() is None


# ─── restore ──────────────────────────────────────────────────────────────────

class TestRestore:
    def test_restore_after_restart_equals_login(self, auth, store):
        auth.login("manager2", "manager123")
        fresh = AuthManager(USERS, SessionStore(store.db_path, store.key))
        assert fresh.restore() == auth.user
        assert fresh.user == auth.user

    def test_restore_with_nothing_stored(self, auth):
        assert auth.restore() is None
        assert auth.user is None

    def test_restore_after_logout_is_empty(self, auth, store):
        auth.login("emp2", "emp123")
        auth.logout()
        fresh = AuthManager(USERS, store)
        assert fresh.restore() is None

    def test_corrupt_record_raises(self, auth, store):
        store.write_raw("{not json")
        with pytest.raises(SessionFormatError):
            auth.restore()
        assert auth.user is None

    def test_version_mismatch_raises(self, auth, store):
        auth.login("emp1", "emp123")
        envelope = json.loads(store.raw())
        envelope["schema_version"] = 99
        store.write_raw(json.dumps(envelope))
        fresh = AuthManager(USERS, store)
        with pytest.raises(SessionFormatError):
            fresh.restore()

    def test_logout_recovers_from_corrupt_record(self, auth, store):
        store.write_raw("garbage")
        with pytest.raises(SessionFormatError):
            auth.restore()
        auth.logout()
        assert auth.restore() is None


# ─── view routing ─────────────────────────────────────────────────────────────

class TestViews:
    def _user(self, username):
        return next(u for u in USERS if u.username == username).to_public()

    def test_available_views_per_role(self):
        assert available_views(self._user("admin1")) == [View.ADMIN, View.LEARNER]
        assert available_views(self._user("manager1")) == [View.MANAGER, View.LEARNER]
        assert available_views(self._user("emp1")) == [View.LEARNER]
        assert available_views(None) == []

    def test_default_view_per_role(self):
        assert default_view(self._user("admin1")) == View.ADMIN
        assert default_view(self._user("manager2")) == View.MANAGER
        assert default_view(self._user("emp3")) == View.LEARNER
        assert default_view(None) == View.LOGIN

    def test_anonymous_always_gets_login(self):
        for view in View:
            assert resolve_view(None, view) == View.LOGIN

    def test_employee_cannot_open_admin_or_manager(self):
        emp = self._user("emp1")
        assert resolve_view(emp, View.ADMIN) == View.LEARNER
        assert resolve_view(emp, "manager") == View.LEARNER

    def test_manager_cannot_open_admin(self):
        assert resolve_view(self._user("manager1"), View.ADMIN) == View.MANAGER

    def test_admin_may_open_learner(self):
        assert resolve_view(self._user("admin1"), "learner") == View.LEARNER

    def test_unknown_view_falls_back_to_default(self):
        assert resolve_view(self._user("manager1"), "bogus") == View.MANAGER
        assert resolve_view(self._user("admin1"), None) == View.ADMIN

    def test_resolved_view_is_always_available(self):
        for record in USERS:
            user = record.to_public()
            for requested in list(View) + ["bogus", None]:
                assert resolve_view(user, requested) in available_views(user)


# ─── persistence failures ─────────────────────────────────────────────────────

class _ReadOnlyStore(SessionStore):
    read_only = True

    def write_raw(self, value):
        if not self.read_only:
            return super().write_raw(value)
        raise sqlite3.OperationalError("attempt to write a readonly database")


class TestLoginPersistFailure:
    def test_failed_save_leaves_user_signed_out(self, tmp_path):
        store = _ReadOnlyStore(str(tmp_path / "ro.db"))
        mgr = AuthManager(USERS, store)
        with pytest.raises(sqlite3.OperationalError):
            mgr.login("admin1", "admin123")
        assert not mgr.is_authenticated
        assert mgr.user is None
        assert store.raw() is None

    def test_failed_save_keeps_previous_session(self, tmp_path):
        path = str(tmp_path / "s.db")
        store = _ReadOnlyStore(path)
        store.read_only = False
        mgr = AuthManager(USERS, store)
        mgr.login("emp1", "emp123")
        before, before_raw = mgr.user, store.raw()
        store.read_only = True
        with pytest.raises(sqlite3.OperationalError):
            mgr.login("admin1", "admin123")
        assert mgr.user == before
        assert store.raw() == before_raw
