"""Session management models."""

from datetime import datetime, timedelta
from typing import NewType

from pydantic import BaseModel, ConfigDict

AuthToken = NewType("AuthToken", str)


class Session(BaseModel):
    """Authenticated supervisor session.

    Sessions are immutable: a token is issued once and only ever deleted.
    """

    token: AuthToken
    issued_at: datetime
    expires_at: datetime
    origin_address: str

    model_config = ConfigDict(frozen=True)

    def is_expired(self, at: datetime) -> bool:
        return at >= self.expires_at

    def remaining(self, at: datetime) -> timedelta:
        return max(self.expires_at - at, timedelta(0))


class IssuedToken(BaseModel):
    """Token handed out after a successful PIN verification."""

    token: AuthToken
    expires_at: datetime


class TokenValidation(BaseModel):
    """Outcome of a token lookup, with the time left measured at lookup."""

    valid: bool
    session: Session | None = None
    remaining: timedelta | None = None
