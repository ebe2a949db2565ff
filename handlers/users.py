"""
Current-user handlers.

The user is identified by the authorizer context; profile details come from
the token claims, never from the ``users`` table.
"""

from models.users import User
from services.onboarding import OnboardingState
from services.preferences import get_preferences
from utils.decorators import lambda_handler, require_auth
from utils.responses import result_error_response, success_response


@lambda_handler()
@require_auth
def get_me(event, context):
    """
    Get the authenticated user with their preferences.

    GET /me

    Args:
        event: Lambda event object (with auth context from authorizer)
        context: Lambda context object

    Returns:
        HTTP response with the user, preferences and onboarding flag
    """
    auth = event["auth"]
    user = User.from_session_claims({"id": auth["user_id"], "email": auth["email"]})

    result = get_preferences(auth["user_id"])
    if not result.ok:
        return result_error_response("Preferences", result.error)

    preferences = result.data
    return success_response(
        data={
            "user": user,
            "preferences": preferences,
            "showOnboarding": not preferences.setup_progress.get(
                "onboardingCompleted", False
            ),
        }
    )


@lambda_handler()
@require_auth
def complete_onboarding(event, context):
    """
    POST /me/onboarding

    Always answers 200 with onboarding hidden. If saving failed the response
    carries a notification the client can show.
    """
    state = OnboardingState(event["auth"]["user_id"])
    saved = state.complete_onboarding()

    return success_response(
        data={
            "showOnboarding": state.show_onboarding,
            "saved": saved,
            "notifications": state.notifications,
        }
    )
