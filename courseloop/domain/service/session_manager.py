"""Session manager: the authentication state machine.

    SIGNED_OUT --request_otp--> OTP_SENT --verify_otp--> AUTHENTICATED
        ^                          |  ^  (wrong/expired code stays here)
        |                          |  |
        +-------- sign_out --------+--+---------------------+

Errors are raised to the caller and leave the state unchanged, except that
a failure while verifying or restoring never leaves a half-authenticated
session behind: it ends in SIGNED_OUT.

Sign-out wins: every sign_out bumps an epoch. An operation that started
before a sign-out and completes after it discards its result, so a late
verification can never resurrect a session the user already ended.
"""

import math
import time
from typing import Callable, Optional

import logfire

from courseloop.config import AuthSettings
from courseloop.domain.error import AuthError, AuthFailure, DomainError, ValidationError
from courseloop.domain.gateway import BackendGateway
from courseloop.domain.gateway.mappers import row_to_profile
from courseloop.domain.model import AuthState, Profile, Session
from courseloop.domain.value import EmailAddress, OTPStatus, SessionStatus, Table, UserId

from .base import Service


class SessionManager(Service):
    """Owns the single in-process session.

    Only this class mutates session state, and only on completion of its
    own operations.
    """

    def __init__(
        self,
        backend: BackendGateway,
        auth_settings: AuthSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize session manager.

        Args:
            backend: Backend gateway
            auth_settings: Email allow-list, code length and resend cooldown
            clock: Monotonic clock used for the resend cooldown
        """
        self.backend = backend
        self.auth_settings = auth_settings
        self._clock = clock
        self._state = AuthState()
        self._epoch = 0
        self._last_sent: dict[str, float] = {}

    @property
    def state(self) -> AuthState:
        """Current state. An expired session is destroyed on read."""
        session = self._state.session
        if session is not None and session.is_expired():
            logfire.info("Session expired", user_id=str(session.user_id))
            self._state = AuthState()
        return self._state

    def require_session(self) -> Session:
        """Return the active session.

        Raises:
            AuthError: NOT_AUTHENTICATED if there is none
        """
        session = self.state.session
        if session is None:
            raise AuthError(AuthFailure.NOT_AUTHENTICATED)
        return session

    def require_user_id(self) -> UserId:
        return self.require_session().user_id

    def attach_profile(self, profile: Profile) -> None:
        """Record a profile provisioned for the signed-in user."""
        state = self.state
        if state.session is None or state.session.user_id != profile.user_id:
            return
        self._state = state.model_copy(update={"profile": profile})

    async def restore_session(self) -> AuthState:
        """Resume a persisted backend session, if one is still valid.

        Never raises for backend failures: any error ends in SIGNED_OUT.

        Returns:
            Resulting state
        """
        epoch = self._epoch
        with logfire.span("session_manager.restore_session"):
            try:
                remote = await self.backend.current_session()
                if remote is None:
                    logfire.info("No session to restore")
                    self._state = AuthState()
                    return self._state

                session = Session(user_id=remote.user_id, expires_at=remote.expires_at)
                if session.is_expired():
                    logfire.info("Persisted session expired", user_id=str(remote.user_id))
                    self._state = AuthState()
                    return self._state

                profile = await self._fetch_profile(session.user_id)
            except DomainError as e:
                logfire.warn(
                    "Session restore failed, signing out locally",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                self._state = AuthState()
                return self._state

            if epoch != self._epoch:
                logfire.info("Discarding restored session after sign-out")
                return self.state

            self._state = AuthState(
                status=SessionStatus.AUTHENTICATED,
                session=session,
                profile=profile,
            )
            logfire.info(
                "Session restored",
                user_id=str(session.user_id),
                profile_known=profile is not None,
            )
            return self._state

    async def request_otp(self, email: str) -> AuthState:
        """Email a one-time code to an institutional address.

        Args:
            email: Address to verify; must end with an allowed suffix

        Returns:
            State after the request (OTP_SENT)

        Raises:
            ValidationError: Malformed or non-institutional address (no network call)
            AuthError: ALREADY_AUTHENTICATED, RESEND_TOO_SOON or SEND_FAILED
            NetworkError: On transport failure
        """
        address = EmailAddress.parse(email, "email")
        suffixes = self.auth_settings.allowed_email_suffixes
        if not address.has_suffix(suffixes):
            raise ValidationError(
                "email",
                f"Please use your university email address ({', '.join(suffixes)})",
            )

        if self.state.is_authenticated:
            raise AuthError(AuthFailure.ALREADY_AUTHENTICATED)

        now = self._clock()
        last_sent = self._last_sent.get(address.root)
        cooldown = self.auth_settings.otp_resend_cooldown_seconds
        if last_sent is not None and now - last_sent < cooldown:
            wait = math.ceil(cooldown - (now - last_sent))
            raise AuthError(AuthFailure.RESEND_TOO_SOON, f"retry in {wait}s")

        epoch = self._epoch
        with logfire.span("session_manager.request_otp", email=address.root):
            await self.backend.send_otp(address.root)
            self._last_sent[address.root] = now

            if epoch != self._epoch:
                logfire.info("Sign-out during OTP request, staying signed out")
                return self.state

            self._state = AuthState(status=SessionStatus.OTP_SENT, email=address)
            logfire.info("OTP sent", email=address.root)
            return self._state

    async def verify_otp(self, email: str, code: str) -> AuthState:
        """Verify the emailed code and open a session.

        A missing profile is not an error: the state becomes AUTHENTICATED
        with ``profile_known`` False and the caller proceeds to onboarding.

        Returns:
            State after verification (AUTHENTICATED)

        Raises:
            ValidationError: Malformed address
            AuthError: NO_PENDING_OTP, INVALID_CODE or EXPIRED_CODE (state stays
                OTP_SENT), SESSION_SUPERSEDED if signed out meanwhile
            NetworkError: On transport failure (state becomes SIGNED_OUT)
        """
        address = EmailAddress.parse(email, "email")
        state = self.state
        if state.status != SessionStatus.OTP_SENT or state.email != address:
            raise AuthError(AuthFailure.NO_PENDING_OTP)

        code = code.strip()
        if len(code) != self.auth_settings.otp_length or not code.isdigit():
            raise AuthError(AuthFailure.INVALID_CODE)

        epoch = self._epoch
        with logfire.span("session_manager.verify_otp", email=address.root):
            try:
                result = await self.backend.verify_otp(address.root, code)
            except DomainError as e:
                logfire.warn("OTP verification failed", error=str(e))
                self._fail_safe(epoch)
                raise

            if result.status != OTPStatus.VERIFIED or result.session is None:
                reason = (
                    AuthFailure.EXPIRED_CODE
                    if result.status == OTPStatus.EXPIRED
                    else AuthFailure.INVALID_CODE
                )
                logfire.info("OTP rejected", email=address.root, reason=reason.value)
                raise AuthError(reason)

            if epoch != self._epoch:
                await self._discard_late_session()

            remote = result.session
            try:
                profile = await self._fetch_profile(remote.user_id)
            except DomainError as e:
                logfire.warn(
                    "Profile load after verification failed, signing out",
                    user_id=str(remote.user_id),
                    error=str(e),
                )
                self._fail_safe(epoch)
                await self._invalidate_remote()
                raise

            if epoch != self._epoch:
                await self._discard_late_session()

            self._state = AuthState(
                status=SessionStatus.AUTHENTICATED,
                email=address,
                session=Session(user_id=remote.user_id, expires_at=remote.expires_at),
                profile=profile,
            )
            self._last_sent.pop(address.root, None)
            logfire.info(
                "Signed in",
                user_id=str(remote.user_id),
                profile_known=profile is not None,
            )
            return self._state

    async def sign_out(self) -> None:
        """End the session. Local state is always cleared.

        A failed remote sign-out is logged, never raised.
        """
        self._epoch += 1
        user_id = self._state.session.user_id if self._state.session else None
        self._state = AuthState()

        with logfire.span(
            "session_manager.sign_out", user_id=str(user_id) if user_id else None
        ):
            await self._invalidate_remote()
            logfire.info("Signed out")

    async def _fetch_profile(self, user_id: UserId) -> Optional[Profile]:
        rows = await self.backend.select(Table.PROFILES, {"id": user_id}, limit=1)
        return row_to_profile(rows[0]) if rows else None

    def _fail_safe(self, epoch: int) -> None:
        if epoch == self._epoch:
            self._state = AuthState()

    async def _invalidate_remote(self) -> None:
        try:
            await self.backend.sign_out()
        except DomainError as e:
            logfire.warn(
                "Remote sign-out failed, local session cleared",
                error=str(e),
                error_type=type(e).__name__,
            )

    async def _discard_late_session(self) -> None:
        logfire.warn("Discarding verification that completed after sign-out")
        await self._invalidate_remote()
        raise AuthError(AuthFailure.SESSION_SUPERSEDED)
