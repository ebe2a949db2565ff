from conftest import USER_ID

from services import onboarding
from services.onboarding import SAVE_FAILED_MESSAGE, OnboardingState


def test_complete_onboarding_persists_and_hides(fake_db):
    state = OnboardingState(USER_ID)

    assert state.show_onboarding
    assert state.complete_onboarding() is True

    assert not state.show_onboarding
    assert state.notifications == []
    progress = fake_db.tables["user_preferences"][0]["setup_progress"]
    assert progress["onboardingCompleted"] is True


def test_persistence_failure_still_hides_onboarding(fake_db):
    fake_db.fail("upsert", "user_preferences")
    shown = []
    state = OnboardingState(USER_ID, notify=shown.append)

    saved = state.complete_onboarding()

    assert saved is False
    assert not state.show_onboarding
    assert state.notifications == [SAVE_FAILED_MESSAGE]
    assert shown == [SAVE_FAILED_MESSAGE]


def test_read_failure_is_not_raised(fake_db):
    fake_db.fail("select", "user_preferences")
    state = OnboardingState(USER_ID)

    assert state.complete_onboarding() is False
    assert not state.show_onboarding


def test_configuration_error_still_hides_onboarding(monkeypatch):
    def missing_config(user_id):
        raise ValueError("Required parameter supabase/url not found")

    monkeypatch.setattr(onboarding, "complete_onboarding_progress", missing_config)
    state = OnboardingState(USER_ID)

    assert state.complete_onboarding() is False
    assert not state.show_onboarding
    assert state.notifications == [SAVE_FAILED_MESSAGE]


def test_null_preference_columns_fall_back_to_defaults(fake_db):
    fake_db.seed("user_preferences", user_id=USER_ID, theme=None, currency=None)
    state = OnboardingState(USER_ID)

    assert state.complete_onboarding() is True

    row = fake_db.tables["user_preferences"][0]
    assert row["setup_progress"] == {"onboardingCompleted": True}
