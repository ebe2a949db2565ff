"""Data access for user preferences and onboarding progress."""

import logging
from typing import Any, Dict

from models.users import DEFAULT_PREFERENCES, UserPreferences
from services.store import EXPECTED_ERRORS, Result
from services.supabase_client import get_client

logger = logging.getLogger(__name__)

TABLE = "user_preferences"


def get_preferences(user_id: str) -> Result:
    """The user's preferences row, or the defaults when none exists yet."""
    try:
        rows = get_client().select(TABLE, filters={"user_id": user_id}, limit=1)
        if not rows:
            return Result(data=UserPreferences(user_id=user_id, **DEFAULT_PREFERENCES))
        return Result(data=UserPreferences.from_row(rows[0]))
    except EXPECTED_ERRORS as err:
        logger.error("Couldn't get preferences for user %s. Error: %s", user_id, err)
        return Result(error=str(err))


def save_setup_progress(user_id: str, progress: Dict[str, Any]) -> Result:
    """
    Upsert ``setup_progress`` on ``user_id``.

    A first write creates the row with the default preferences.
    """
    try:
        client = get_client()
        existing = client.select(TABLE, filters={"user_id": user_id}, limit=1)
        row: Dict[str, Any] = {"user_id": user_id, "setup_progress": progress}
        if not existing:
            row = {**DEFAULT_PREFERENCES, **row}

        rows = client.upsert(TABLE, row, on_conflict="user_id")
        return Result(data=UserPreferences.from_row(rows[0]) if rows else None)
    except EXPECTED_ERRORS as err:
        logger.error(
            "Couldn't save setup progress for user %s. Error: %s", user_id, err
        )
        return Result(error=str(err))


def complete_onboarding_progress(user_id: str) -> Result:
    """Mark onboarding completed, keeping the rest of the setup progress."""
    current = get_preferences(user_id)
    if not current.ok:
        return current

    progress = {**current.data.setup_progress, "onboardingCompleted": True}
    return save_setup_progress(user_id, progress)
