"""Onboarding state for the signed-in user."""

import logging
from typing import Callable, List, Optional

from services.preferences import complete_onboarding_progress

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = (
    "Your onboarding progress couldn't be saved. You can keep using the app."
)


class OnboardingState:
    """
    Whether the onboarding flow should be shown.

    Completing onboarding always hides it; a failure to persist the
    completion is reported through ``notify`` and never raised.
    """

    def __init__(
        self, user_id: str, notify: Optional[Callable[[str], None]] = None
    ):
        self.user_id = user_id
        self.show_onboarding = True
        self.notifications: List[str] = []
        self._notify = notify

    def complete_onboarding(self) -> bool:
        """Returns whether the completion was persisted."""
        self.show_onboarding = False

        try:
            result = complete_onboarding_progress(self.user_id)
        except Exception:
            logger.exception(
                "Couldn't save onboarding completion for user %s", self.user_id
            )
            self._report_failure()
            return False

        if not result.ok:
            logger.error(
                "Couldn't save onboarding completion for user %s. Error: %s",
                self.user_id,
                result.error,
            )
            self._report_failure()
            return False

        logger.info("Onboarding completed for user %s", self.user_id)
        return True

    def _report_failure(self) -> None:
        self.notifications.append(SAVE_FAILED_MESSAGE)
        if self._notify:
            self._notify(SAVE_FAILED_MESSAGE)
