"""
Supabase authentication service: token validation and the GoTrue session API
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import jwt
import requests
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from models.users import UserProfile
from services.parameter_store import config
from services.supabase_client import SupabaseError, get_client

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"

# Refresh a little before the access token actually expires
EXPIRY_MARGIN_SECONDS = 10

AuthListener = Callable[[str, Optional[Dict[str, Any]]], None]


class AuthError(Exception):
    """Raised when GoTrue rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SupabaseAuth:
    """
    Client for the Supabase auth API.

    Holds at most one session. Listeners registered with
    ``on_auth_state_change`` are told about sign-in, sign-out and token refresh.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        jwt_secret: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ):
        self._url = url
        self._anon_key = anon_key
        self._jwt_secret = jwt_secret
        self._settings: Optional[Dict[str, Any]] = None
        self.http = session or requests.Session()
        self.timeout = timeout

        self._session: Optional[Dict[str, Any]] = None
        self._listeners: List[AuthListener] = []

    def _setting(self, name: str) -> Optional[str]:
        if self._settings is None:
            self._settings = config.load_supabase_config()
        return self._settings.get(name)

    @property
    def supabase_url(self) -> str:
        return (self._url or self._setting("url") or "").rstrip("/")

    @property
    def supabase_anon_key(self) -> Optional[str]:
        return self._anon_key or self._setting("anon_key")

    @property
    def supabase_jwt_secret(self) -> Optional[str]:
        if self._jwt_secret is not None:
            return self._jwt_secret
        return self._setting("jwt_secret")

    # Token validation

    def validate_jwt_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Validate a Supabase JWT token and return user information

        Args:
            token: The JWT token from the Authorization header

        Returns:
            Dictionary containing user information if valid, None otherwise
        """
        if self.supabase_jwt_secret:
            return self._validate_jwt_manual(token)

        logger.info("Using API-based token verification (no JWT secret available)")
        return self._validate_jwt_via_api(token)

    def _validate_jwt_manual(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            payload = jwt.decode(
                token,
                self.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except ExpiredSignatureError:
            logger.warning("JWT token has expired")
            return None
        except InvalidTokenError as e:
            logger.warning("Invalid JWT token: %s", e)
            return None

        return {
            "id": payload.get("sub"),
            "email": payload.get("email"),
            "user_metadata": payload.get("user_metadata") or {},
            "role": payload.get("role"),
            "exp": payload.get("exp"),
        }

    def _validate_jwt_via_api(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            user = self.get_user(token)
        except (AuthError, requests.RequestException) as e:
            logger.warning("Token validation failed via API: %s", e)
            return None

        return {
            "id": user.get("id"),
            "email": user.get("email"),
            "user_metadata": user.get("user_metadata") or {},
            "role": user.get("role"),
            "exp": None,
        }

    def extract_token_from_header(self, authorization_header: str) -> Optional[str]:
        """Return the bearer token from an Authorization header value."""
        if not authorization_header:
            return None

        parts = authorization_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None

        return parts[1]

    def get_user_from_request(self, event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Extract and validate user information from Lambda event

        Args:
            event: AWS Lambda event containing headers

        Returns:
            User information if authentication successful, None otherwise
        """
        headers = event.get("headers") or {}
        authorization = headers.get("Authorization") or headers.get("authorization")

        token = self.extract_token_from_header(authorization)
        if not token:
            logger.debug("Missing or malformed Authorization header")
            return None

        return self.validate_jwt_token(token)

    # GoTrue API

    def _call(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = {
            "apikey": self.supabase_anon_key or "",
            "Content-Type": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = self.http.request(
            method,
            f"{self.supabase_url}/auth/v1/{path}",
            params=params,
            json=body,
            headers=headers,
            timeout=self.timeout,
        )

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {"msg": response.text}

        if response.status_code >= 400:
            message = (
                payload.get("error_description")
                or payload.get("msg")
                or payload.get("message")
                or f"HTTP {response.status_code}"
            )
            raise AuthError(message, status_code=response.status_code)

        return payload

    def get_user(self, access_token: str) -> Dict[str, Any]:
        return self._call("GET", "user", token=access_token)

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """
        Register a user and create their ``users`` profile row.

        Returns the GoTrue response. When email confirmation is enabled it
        carries no session and the user must confirm before signing in.
        """
        data = self._call("POST", "signup", {"email": email, "password": password})
        user = data.get("user") or (data if data.get("id") else None)

        if user:
            profile = UserProfile(
                id=user["id"],
                email=user.get("email") or email,
                name=email.split("@")[0],
            )
            try:
                get_client().insert("users", profile.to_row())
            except (SupabaseError, requests.RequestException) as e:
                logger.error(
                    "Couldn't create profile for user %s. Error: %s", profile.id, e
                )
                raise AuthError(str(e)) from e

            logger.info("Signed up user %s", profile.id)

        if data.get("access_token"):
            self._set(data, SIGNED_IN)
        return data

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """Exchange credentials for a session."""
        session = self._call(
            "POST",
            "token",
            {"email": email, "password": password},
            params={"grant_type": "password"},
        )
        self._set(session, SIGNED_IN)
        return session

    def refresh_session(self) -> Optional[Dict[str, Any]]:
        refresh_token = (self._session or {}).get("refresh_token")
        if not refresh_token:
            return None

        session = self._call(
            "POST",
            "token",
            {"refresh_token": refresh_token},
            params={"grant_type": "refresh_token"},
        )
        self._set(session, TOKEN_REFRESHED)
        return session

    def get_session(self) -> Optional[Dict[str, Any]]:
        """
        The current session, refreshed first if the access token expired.

        A failed refresh signs the session out.
        """
        if self._session is None:
            return None

        expires_at = self._session.get("expires_at")
        if expires_at and expires_at - EXPIRY_MARGIN_SECONDS <= time.time():
            try:
                return self.refresh_session()
            except (AuthError, requests.RequestException) as e:
                logger.warning("Couldn't refresh session. Error: %s", e)
                self._clear()
                return None

        return self._session

    def set_session(self, session: Dict[str, Any]) -> None:
        """Adopt a session obtained elsewhere, such as from a stored token pair."""
        self._set(session, SIGNED_IN)

    def sign_out(self) -> None:
        """Revoke the session. Local state is cleared even if revocation fails."""
        token = (self._session or {}).get("access_token")
        if token:
            try:
                self._call("POST", "logout", token=token)
            except (AuthError, requests.RequestException) as e:
                logger.warning("Couldn't revoke session. Error: %s", e)
        self._clear()

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        """
        Register ``callback(event, session)``.

        Returns a function that removes the callback again.
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set(self, session: Dict[str, Any], event: str) -> None:
        session = dict(session)
        if not session.get("expires_at") and session.get("expires_in"):
            session["expires_at"] = int(time.time()) + int(session["expires_in"])
        self._session = session
        self._emit(event, session)

    def _clear(self) -> None:
        self._session = None
        self._emit(SIGNED_OUT, None)

    def _emit(self, event: str, session: Optional[Dict[str, Any]]) -> None:
        for listener in list(self._listeners):
            listener(event, session)


# Global instance
supabase_auth = SupabaseAuth()
