"""
Authentication handlers for the Pocket Ledger API.

Thin HTTP wrappers over Supabase Auth. Each request gets its own
``SupabaseAuth`` so sessions never leak between warm invocations.
"""

import logging

from models.users import Credentials, User
from services.session import AppContext
from services.supabase_auth import AuthError, SupabaseAuth
from utils.decorators import lambda_handler, validate_json_body, validate_model
from utils.responses import (HTTPStatus, error_response, success_response,
                             unauthorized_response)

logger = logging.getLogger(__name__)


def _session_payload(session):
    return {
        "accessToken": session.get("access_token"),
        "refreshToken": session.get("refresh_token"),
        "expiresAt": session.get("expires_at"),
    }


@lambda_handler()
@validate_json_body(required_fields=["email", "password"])
@validate_model(Credentials)
def signup(event, context):
    """
    Register a new user.

    POST /auth/signup

    Creates the Supabase Auth user and the matching ``users`` profile row.
    When the project requires email confirmation no session is returned.

    Args:
        event: Lambda event object with email and password
        context: Lambda context object

    Returns:
        HTTP 201 response with the user and, if available, the session
    """
    credentials = event["model"]
    try:
        data = SupabaseAuth().sign_up(
            credentials.email, credentials.password.get_secret_value()
        )
    except AuthError as e:
        logger.warning("Sign-up failed for %s: %s", credentials.email, e)
        return error_response(e.message, e.status_code or HTTPStatus.BAD_REQUEST)

    user_claims = data.get("user") or data
    body = {"user": User.from_session_claims(user_claims)}
    if data.get("access_token"):
        body["session"] = _session_payload(data)
    else:
        body["confirmationRequired"] = True

    return success_response(
        data=body,
        message="Account created successfully",
        status_code=HTTPStatus.CREATED,
    )


@lambda_handler()
@validate_json_body(required_fields=["email", "password"])
@validate_model(Credentials)
def login(event, context):
    """POST /auth/login: exchange email and password for a session."""
    credentials = event["model"]
    app = AppContext(SupabaseAuth())

    result = app.login(credentials.email, credentials.password.get_secret_value())
    if not result.success:
        return unauthorized_response(result.error or "Invalid login credentials")

    return success_response(
        data={"user": app.user, "session": _session_payload(app.auth.get_session())}
    )


@lambda_handler()
def logout(event, context):
    """POST /auth/logout: revoke the bearer token's session."""
    auth = SupabaseAuth()
    token = auth.extract_token_from_header(
        (event.get("headers") or {}).get("Authorization")
        or (event.get("headers") or {}).get("authorization")
    )
    if not token:
        return unauthorized_response("Missing bearer token")

    app = AppContext(auth)
    auth.set_session({"access_token": token})
    app.logout()
    return success_response(message="Signed out")
