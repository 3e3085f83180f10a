"""Supabase Auth (GoTrue) email-OTP gateway."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
import logfire

from courseloop.adapter.supabase.http import error_body, raise_if_unavailable, transport_errors
from courseloop.adapter.supabase.token_store import StoredSession, TokenStore
from courseloop.domain.error import AuthError, AuthFailure, NetworkError
from courseloop.domain.gateway import AuthGateway, OTPVerification, RemoteSession
from courseloop.domain.value import OTPStatus, UserId

EXPIRED_ERROR_CODES = {"otp_expired"}


class SupabaseAuthGateway(AuthGateway):
    """Email OTP against ``/auth/v1``.

    The access token is kept in ``token_store`` so the table gateway can
    send requests as the signed-in user.
    """

    def __init__(self, client: httpx.AsyncClient, token_store: TokenStore) -> None:
        """Initialize auth gateway.

        Args:
            client: Shared client with base_url and apikey header set
            token_store: Where issued tokens are persisted
        """
        self.client = client
        self.token_store = token_store

    async def send_otp(self, email: str) -> None:
        with transport_errors("send_otp"):
            response = await self.client.post(
                "/auth/v1/otp", json={"email": email, "create_user": True}
            )

        if response.status_code == 429:
            raise AuthError(AuthFailure.SEND_FAILED, "rate limited")
        raise_if_unavailable(response, "send_otp")
        if response.is_error:
            body = error_body(response)
            detail = body.get("msg") or body.get("error_description") or response.text
            logfire.warn(
                "OTP send refused",
                status_code=response.status_code,
                error_code=body.get("error_code"),
            )
            raise AuthError(AuthFailure.SEND_FAILED, detail)

    async def verify_otp(self, email: str, code: str) -> OTPVerification:
        with transport_errors("verify_otp"):
            response = await self.client.post(
                "/auth/v1/verify",
                json={"type": "email", "email": email, "token": code},
            )

        raise_if_unavailable(response, "verify_otp")
        if response.is_error:
            body = error_body(response)
            status = (
                OTPStatus.EXPIRED
                if body.get("error_code") in EXPIRED_ERROR_CODES
                else OTPStatus.INVALID
            )
            logfire.info(
                "OTP verification rejected",
                status_code=response.status_code,
                error_code=body.get("error_code"),
            )
            return OTPVerification(status=status)

        stored = self._store_tokens(response.json())
        return OTPVerification(
            status=OTPStatus.VERIFIED,
            session=RemoteSession(user_id=UserId(stored.user_id), expires_at=stored.expires_at),
        )

    async def current_session(self) -> Optional[RemoteSession]:
        stored = self.token_store.load()
        if stored is None:
            return None

        if not stored.is_expired():
            with transport_errors("current_session"):
                response = await self.client.get(
                    "/auth/v1/user", headers=self._bearer(stored.access_token)
                )
            raise_if_unavailable(response, "current_session")
            if response.is_success:
                return RemoteSession(
                    user_id=UserId(stored.user_id), expires_at=stored.expires_at
                )

        refreshed = await self._refresh(stored)
        if refreshed is None:
            return None
        return RemoteSession(
            user_id=UserId(refreshed.user_id), expires_at=refreshed.expires_at
        )

    async def sign_out(self) -> None:
        stored = self.token_store.load()
        if stored is None:
            return

        try:
            with transport_errors("sign_out"):
                response = await self.client.post(
                    "/auth/v1/logout", headers=self._bearer(stored.access_token)
                )
            raise_if_unavailable(response, "sign_out")
            if response.is_error:
                # Token already revoked or expired server-side
                logfire.info("Logout rejected", status_code=response.status_code)
        finally:
            self.token_store.clear()

    async def _refresh(self, stored: StoredSession) -> Optional[StoredSession]:
        with transport_errors("refresh_session"):
            response = await self.client.post(
                "/auth/v1/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": stored.refresh_token},
            )

        raise_if_unavailable(response, "refresh_session")
        if response.is_error:
            logfire.info("Session refresh rejected", status_code=response.status_code)
            self.token_store.clear()
            return None
        return self._store_tokens(response.json())

    def _store_tokens(self, payload: dict[str, Any]) -> StoredSession:
        try:
            if "expires_at" in payload:
                expires_at = datetime.fromtimestamp(payload["expires_at"], tz=timezone.utc)
            else:
                expires_at = datetime.now(timezone.utc) + timedelta(
                    seconds=payload["expires_in"]
                )
            stored = StoredSession(
                access_token=payload["access_token"],
                refresh_token=payload["refresh_token"],
                expires_at=expires_at,
                user_id=payload["user"]["id"],
            )
        except (KeyError, TypeError, ValueError) as e:
            logfire.error("Malformed token response", error=str(e))
            raise NetworkError(NetworkError.UNAVAILABLE, "malformed token response") from e

        self.token_store.save(stored)
        return stored

    @staticmethod
    def _bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
