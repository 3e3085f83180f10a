"""In-memory email-OTP auth gateway for testing.

Codes are "emailed" to an outbox tests can read. Users are created on
first send, as the hosted backend does.
"""

import asyncio
import secrets
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from courseloop.domain.gateway import AuthGateway, OTPVerification, RemoteSession
from courseloop.domain.value import OTPStatus, UserId


class InMemoryAuthGateway(AuthGateway):
    """In-memory implementation of AuthGateway for testing."""

    def __init__(
        self,
        otp_length: int = 6,
        code_ttl: timedelta = timedelta(minutes=10),
        session_ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self.otp_length = otp_length
        self.code_ttl = code_ttl
        self.session_ttl = session_ttl
        self.outbox: list[tuple[str, str]] = []
        self.session: Optional[RemoteSession] = None
        self.sign_out_calls = 0
        self._users: dict[str, UserId] = {}
        self._codes: dict[str, tuple[str, datetime]] = {}
        self._failures: dict[str, list[Exception]] = defaultdict(list)
        self._verify_gate: Optional[asyncio.Event] = None

    def fail_next(self, operation: str, error: Exception) -> None:
        """Make the next call to ``operation`` raise ``error``."""
        self._failures[operation].append(error)

    def last_code(self, email: str) -> str:
        """Most recent code sent to ``email``."""
        return next(code for to, code in reversed(self.outbox) if to == email)

    def user_id_for(self, email: str) -> UserId:
        return self._users[email]

    def expire_codes(self) -> None:
        past = datetime.now(timezone.utc) - timedelta(seconds=1)
        self._codes = {email: (code, past) for email, (code, _) in self._codes.items()}

    def hold_verification(self) -> asyncio.Event:
        """Block verify_otp until the returned event is set."""
        self._verify_gate = asyncio.Event()
        return self._verify_gate

    async def _enter(self, operation: str) -> None:
        await asyncio.sleep(0)
        pending = self._failures.get(operation)
        if pending:
            raise pending.pop(0)

    async def send_otp(self, email: str) -> None:
        await self._enter("send_otp")
        self._users.setdefault(email, UserId(uuid4()))
        code = "".join(secrets.choice("0123456789") for _ in range(self.otp_length))
        self._codes[email] = (code, datetime.now(timezone.utc) + self.code_ttl)
        self.outbox.append((email, code))

    async def verify_otp(self, email: str, code: str) -> OTPVerification:
        await self._enter("verify_otp")
        if self._verify_gate is not None:
            await self._verify_gate.wait()

        issued = self._codes.get(email)
        if issued is None or issued[0] != code:
            return OTPVerification(status=OTPStatus.INVALID)
        if issued[1] <= datetime.now(timezone.utc):
            return OTPVerification(status=OTPStatus.EXPIRED)

        del self._codes[email]
        self.session = RemoteSession(
            user_id=self._users[email],
            expires_at=datetime.now(timezone.utc) + self.session_ttl,
        )
        return OTPVerification(status=OTPStatus.VERIFIED, session=self.session)

    async def current_session(self) -> Optional[RemoteSession]:
        await self._enter("current_session")
        if self.session and self.session.expires_at <= datetime.now(timezone.utc):
            self.session = None
        return self.session

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        await self._enter("sign_out")
        self.session = None
