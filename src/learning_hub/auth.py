"""
auth.py – Session ownership and role-based view routing
=======================================================
AuthManager is a login gate, not a security boundary: credentials are a
plaintext table compared by exact match, with no hashing, throttling or
expiry.  It owns the single active session for a running instance and
mirrors it into a SessionStore so a restart can pick it back up.

  auth = AuthManager(USERS, SessionStore(path))
  auth.restore()                       # rehydrate at startup
  auth.login("emp1", "emp123")         # → True / False
  auth.user                            # → PublicUser | None
  auth.logout()                        # idempotent

View routing mirrors the navigation rules of the dashboards:

  available_views(user)   views the role may open, in menu order
  default_view(user)      landing view after sign-in
  resolve_view(user, v)   what to actually render when *v* is requested
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from learning_hub.models import PublicUser, Role, UserRecord
from learning_hub.session_store import SessionStore, SessionStoreError

logger = logging.getLogger(__name__)


class View(str, Enum):
    LOGIN   = "login"
    ADMIN   = "admin"
    MANAGER = "manager"
    LEARNER = "learner"

    @property
    def label(self) -> str:
        return {
            View.LOGIN:   "Sign in",
            View.ADMIN:   "Admin Portal",
            View.MANAGER: "Manager Portal",
            View.LEARNER: "Learner Portal",
        }[self]


_ROLE_VIEWS: dict[Role, list[View]] = {
    Role.ADMIN:    [View.ADMIN, View.LEARNER],
    Role.MANAGER:  [View.MANAGER, View.LEARNER],
    Role.EMPLOYEE: [View.LEARNER],
}


class AuthManager:
    """Owns the active session; constructed with its credential table and store."""

    def __init__(self, users: Iterable[UserRecord], store: SessionStore) -> None:
        self._users = list(users)
        self._store = store
        self._user: Optional[PublicUser] = None

    # ── Accessors ────────────────────────────────────────────────────────────

    @property
    def user(self) -> Optional[PublicUser]:
        return self._user

    def current_user(self) -> Optional[PublicUser]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def login(self, username: str, password: str) -> bool:
        """Exact-match lookup; on success the stripped record becomes the session."""
        found = next(
            (u for u in self._users if u.username == username and u.password == password),
            None,
        )
        if found is None:
            logger.info("Login failed for %r", username)
            return False

        public = found.to_public()
        self._store.save(public)
        self._user = public
        logger.info("Login succeeded for %s (%s)", public.username, public.role.value)
        return True

    def logout(self) -> None:
        if self._user is not None:
            logger.info("Logout for %s", self._user.username)
        self._user = None
        self._store.clear()

    def restore(self) -> Optional[PublicUser]:
        """
        Rehydrate the session from the store.

        Returns the restored user (or None when nothing was persisted).
        SessionFormatError from the store propagates: a corrupt or
        version-mismatched record is reported, not mistaken for a sign-out.
        """
        try:
            restored = self._store.load()
        except SessionStoreError:
            logger.exception("Persisted session could not be restored")
            raise
        if restored is not None:
            self._user = restored
            logger.info("Session restored for %s", restored.username)
        return restored


# ─── View routing ─────────────────────────────────────────────────────────────

def available_views(user: Optional[PublicUser]) -> list[View]:
    if user is None:
        return []
    return list(_ROLE_VIEWS[user.role])


def default_view(user: Optional[PublicUser]) -> View:
    if user is None:
        return View.LOGIN
    if user.role == Role.ADMIN:
        return View.ADMIN
    if user.role == Role.MANAGER:
        return View.MANAGER
    return View.LEARNER


def resolve_view(user: Optional[PublicUser], requested: "View | str | None") -> View:
    """Return the view to render; unknown or forbidden requests fall back to the default."""
    if user is None:
        return View.LOGIN
    try:
        view = View(requested) if requested is not None else default_view(user)
    except ValueError:
        return default_view(user)
    if view not in _ROLE_VIEWS[user.role]:
        return default_view(user)
    return view
