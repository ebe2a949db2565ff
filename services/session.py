"""
Application auth context.

``AppContext`` owns the signed-in user for one client: it loads the session
on start, follows session-change events, and performs login and logout.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

import requests

from models.base import LedgerModel
from models.users import User
from services.supabase_auth import AuthError, SupabaseAuth

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"
AUTH_PATH = "/auth"


class AuthResult(LedgerModel):
    success: bool
    error: Optional[str] = None


class AppContext:
    """
    Holds the current ``User`` and keeps it in sync with the auth session.

    :param auth: Auth client whose session this context follows.
    :param navigate: Called with a path after login and logout.
    """

    def __init__(
        self,
        auth: SupabaseAuth,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.auth = auth
        self.navigate = navigate or (lambda path: None)
        self.user: Optional[User] = None
        self.loading = True

        self._in_flight = threading.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def initialize(self) -> None:
        """Load the active session and start following session changes."""
        self.check_session()
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.on_auth_state_change(self._on_auth_event)

    def check_session(self) -> bool:
        """
        Reconcile the user with the current session.

        Returns False without doing anything when another check is running.
        """
        if not self._in_flight.acquire(blocking=False):
            logger.debug("Session check already in progress")
            return False

        try:
            session = self.auth.get_session()
            self._reconcile(session)
        except (AuthError, requests.RequestException) as e:
            logger.error("Couldn't check session. Error: %s", e)
            self.user = None
        finally:
            self.loading = False
            self._in_flight.release()
        return True

    def _reconcile(self, session: Optional[Dict[str, Any]]) -> None:
        claims = (session or {}).get("user")
        user = User.from_session_claims(claims) if claims else None

        if user is None:
            self.user = None
            return

        # Keep the existing object while the same user stays signed in
        if self.user is None or self.user.id != user.id:
            self.user = user

    def _on_auth_event(self, event: str, session: Optional[Dict[str, Any]]) -> None:
        logger.info("Auth state changed: %s", event)
        self._reconcile(session)
        self.loading = False

    def login(self, email: str, password: str) -> AuthResult:
        try:
            session = self.auth.sign_in_with_password(email, password)
        except (AuthError, requests.RequestException) as e:
            logger.warning("Login failed for %s. Error: %s", email, e)
            return AuthResult(success=False, error=str(e))

        user = User.from_session_claims(session.get("user") or {})
        if user is None:
            return AuthResult(success=False, error="No user returned from sign-in")

        self.user = user
        self.navigate(DASHBOARD_PATH)
        return AuthResult(success=True)

    def logout(self) -> None:
        self.user = None
        self.auth.sign_out()
        self.navigate(AUTH_PATH)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
