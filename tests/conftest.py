"""
Shared pytest fixtures for the Learning Hub test suite.
Every fixture is offline: the session store is a throw-away SQLite file
under tmp_path and SMTP is never configured.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import sys
import os

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)


import pytest

from factories import make_employee, make_item

from learning_hub.auth import AuthManager
from learning_hub.mock_data import USERS
from learning_hub.session_store import SessionStore


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def store(tmp_path):
    return SessionStore(str(tmp_path / "session.db"))


@pytest.fixture
def auth(store):
    return AuthManager(USERS, store)


@pytest.fixture
def employee():
    return make_employee()


@pytest.fixture
def chain_items():
    """a ← b ← c, all in one path."""
    return [
        make_item("a", status="completed", progress=100),
        make_item("b", status="in-progress", progress=50, prerequisite="a"),
        make_item("c", prerequisite="b"),
    ]
