"""Admin session models."""

from enum import Enum
from typing import Optional
from datetime import datetime, timedelta, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthOutcome(str, Enum):
    """Result of a session gate operation."""
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    INVALID_CREDENTIALS = "invalid_credentials"
    TRANSIENT_FAILURE = "transient_failure"


class AdminAccount(BaseModel):
    """Row of the ``admins`` table returned by a credential check."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Admin ID")
    email: str = Field(..., description="Login email")
    name: str = Field("", description="Display name")
    is_active: bool = Field(True, description="Only active admins may log in")
    last_login: Optional[datetime] = None


class SessionToken(BaseModel):
    """Persisted ``admin_session`` record: ``{id, email, name, loginTime}``."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    email: str
    name: str = ""
    login_time: datetime = Field(..., alias="loginTime")

    @field_validator("login_time")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def issue(cls, admin: AdminAccount, now: Optional[datetime] = None) -> "SessionToken":
        return cls(
            id=admin.id,
            email=admin.email,
            name=admin.name,
            login_time=now or datetime.now(timezone.utc),
        )

    @classmethod
    def from_json(cls, raw: str) -> "SessionToken":
        return cls.model_validate_json(raw)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def age(self, now: Optional[datetime] = None) -> timedelta:
        return (now or datetime.now(timezone.utc)) - self.login_time


class SessionState(BaseModel):
    """Explicit session value handed to callers instead of global state."""
    outcome: AuthOutcome
    token: Optional[SessionToken] = None

    @property
    def authorized(self) -> bool:
        return self.outcome == AuthOutcome.AUTHORIZED

    @classmethod
    def unauthorized(cls) -> "SessionState":
        return cls(outcome=AuthOutcome.UNAUTHORIZED)
