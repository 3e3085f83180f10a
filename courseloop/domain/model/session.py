"""Authenticated session and the state machine snapshot."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from courseloop.domain.model.common import DomainModel, utcnow
from courseloop.domain.model.profile import Profile
from courseloop.domain.value import EmailAddress, SessionStatus, UserId


class Session(DomainModel):
    """An authenticated backend session. At most one per process."""

    user_id: UserId
    issued_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.expires_at


class AuthState(DomainModel):
    """Immutable snapshot of SessionManager state.

    - SIGNED_OUT: no email, no session
    - OTP_SENT: email set, no session
    - AUTHENTICATED: session set; profile set once onboarding data is known
    """

    status: SessionStatus = SessionStatus.SIGNED_OUT
    email: Optional[EmailAddress] = None
    session: Optional[Session] = None
    profile: Optional[Profile] = None

    @property
    def profile_known(self) -> bool:
        return self.profile is not None

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED
