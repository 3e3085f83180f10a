"""Auth half of the backend contract: email OTP and session primitives."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from courseloop.domain.value import OTPStatus, UserId
from courseloop.domain.value.common import ValueObject


class RemoteSession(ValueObject):
    """Session as reported by the backend."""

    user_id: UserId
    expires_at: datetime


class OTPVerification(ValueObject):
    """Result of verifying an emailed code.

    ``session`` is set only when ``status`` is VERIFIED.
    """

    status: OTPStatus
    session: Optional[RemoteSession] = None


class AuthGateway(ABC):
    """Email-OTP authentication at the backend.

    Implementations persist their own session token; callers never see it.
    """

    @abstractmethod
    async def send_otp(self, email: str) -> None:
        """Email a one-time code to ``email``.

        Raises:
            AuthError: With SEND_FAILED when the backend refuses to send
            NetworkError: On transport failure
        """
        pass

    @abstractmethod
    async def verify_otp(self, email: str, code: str) -> OTPVerification:
        """Verify a code. A wrong or expired code is a result, not an error.

        Raises:
            NetworkError: On transport failure
        """
        pass

    @abstractmethod
    async def current_session(self) -> Optional[RemoteSession]:
        """Return the persisted session if it is still valid, else None."""
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """Invalidate the backend session and forget the local token."""
        pass
