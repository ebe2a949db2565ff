from datetime import datetime
from typing import Any, Dict, Literal, Optional

import pydantic
from pydantic import EmailStr, Field, SecretStr

from models.base import LedgerModel
from models.debts import DebtPayoffStrategy

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "currency": "USD",
    "date_format": "MM/DD/YYYY",
    "theme": "system",
    "hide_balances": False,
    "email_notifications": True,
    "browser_notifications": True,
    "mobile_notifications": False,
}


class User(LedgerModel):
    """The signed-in user, built from session claims."""

    id: str
    email: str = ""
    name: str = "User"
    avatar_url: Optional[str] = None

    @classmethod
    def from_session_claims(cls, claims: Dict[str, Any]) -> Optional["User"]:
        """
        Build a user from the auth session's user claims.

        Uses the session alone; the ``users`` table is row-level secured and a
        profile lookup there can fail for freshly signed-up users.
        """
        if not claims or not claims.get("id"):
            return None

        email = claims.get("email") or ""
        metadata = claims.get("user_metadata") or {}

        return cls(
            id=claims["id"],
            email=email,
            name=email.split("@")[0] if email else "User",
            avatar_url=metadata.get("avatar_url"),
        )


class UserProfile(LedgerModel):
    """Row in the ``users`` table created at sign-up."""

    id: str
    email: str
    name: str
    created_at: Optional[datetime] = None

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class UserPreferences(LedgerModel):
    user_id: str
    debt_payoff_strategy: Optional[DebtPayoffStrategy] = None
    currency: str = "USD"
    date_format: str = "MM/DD/YYYY"
    theme: Literal["light", "dark", "system"] = "system"
    hide_balances: bool = False
    email_notifications: bool = True
    browser_notifications: bool = True
    mobile_notifications: bool = False
    setup_progress: Dict[str, Any] = Field(default_factory=dict)

    @pydantic.field_validator("setup_progress", mode="before")
    @classmethod
    def null_progress(cls, v):
        return v or {}

    @pydantic.field_validator(*DEFAULT_PREFERENCES, mode="before")
    @classmethod
    def null_to_default(cls, v, info):
        # Columns added after a row was written come back null
        return DEFAULT_PREFERENCES[info.field_name] if v is None else v

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> Optional["UserPreferences"]:
        if not row:
            return None
        return cls.model_validate(row)


class Credentials(LedgerModel):
    """Email/password pair for sign-in and sign-up."""

    email: EmailStr
    password: SecretStr

    @pydantic.field_validator("email")
    @classmethod
    def email_lowercase(cls, v):
        return v.lower()

    @pydantic.field_validator("password")
    @classmethod
    def password_length(cls, v):
        if len(v.get_secret_value()) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v
