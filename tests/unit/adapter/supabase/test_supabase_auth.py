"""Unit tests for SupabaseAuthGateway."""

import json
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import httpx
import pytest

from courseloop.adapter.supabase import (
    MemoryTokenStore,
    StoredSession,
    SupabaseAuthGateway,
    create_http_client,
)
from courseloop.domain.error import AuthError, AuthFailure, NetworkError
from courseloop.domain.value import OTPStatus

USER_ID = uuid4()


def token_payload(expires_in: int = 3600) -> dict:
    return {
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "token_type": "bearer",
        "expires_in": expires_in,
        "user": {"id": str(USER_ID), "email": "student@berkeley.edu"},
    }


def make_gateway(handler, store: MemoryTokenStore | None = None) -> SupabaseAuthGateway:
    client = create_http_client(
        "https://project.supabase.co",
        "anon-key",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )
    return SupabaseAuthGateway(client=client, token_store=store or MemoryTokenStore())


def stored_session(expires_in: timedelta = timedelta(hours=1)) -> StoredSession:
    return StoredSession(
        access_token="access-0",
        refresh_token="refresh-0",
        expires_at=datetime.now(timezone.utc) + expires_in,
        user_id=USER_ID,
    )


class TestSendOtp:
    """Tests for send_otp."""

    @pytest.mark.asyncio
    async def test_posts_email_with_user_creation(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        gateway = make_gateway(handler)

        await gateway.send_otp("student@berkeley.edu")

        [request] = requests
        assert request.url.path == "/auth/v1/otp"
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content) == {
            "email": "student@berkeley.edu",
            "create_user": True,
        }

    @pytest.mark.asyncio
    async def test_refused_send(self):
        gateway = make_gateway(
            lambda request: httpx.Response(
                400, json={"error_code": "email_address_invalid", "msg": "Email address is invalid"}
            )
        )

        with pytest.raises(AuthError) as exc_info:
            await gateway.send_otp("student@berkeley.edu")

        assert exc_info.value.reason == AuthFailure.SEND_FAILED
        assert exc_info.value.detail == "Email address is invalid"

    @pytest.mark.asyncio
    async def test_rate_limited_send(self):
        gateway = make_gateway(lambda request: httpx.Response(429, json={}))

        with pytest.raises(AuthError) as exc_info:
            await gateway.send_otp("student@berkeley.edu")

        assert exc_info.value.reason == AuthFailure.SEND_FAILED

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        gateway = make_gateway(handler)

        with pytest.raises(NetworkError) as exc_info:
            await gateway.send_otp("student@berkeley.edu")

        assert exc_info.value.reason == NetworkError.TRANSPORT


class TestVerifyOtp:
    """Tests for verify_otp."""

    @pytest.mark.asyncio
    async def test_verified_code_stores_tokens(self):
        store = MemoryTokenStore()
        gateway = make_gateway(lambda request: httpx.Response(200, json=token_payload()), store)

        result = await gateway.verify_otp("student@berkeley.edu", "123456")

        assert result.status == OTPStatus.VERIFIED
        assert result.session.user_id == USER_ID
        assert store.load().access_token == "access-1"

    @pytest.mark.asyncio
    async def test_expired_code(self):
        store = MemoryTokenStore()
        gateway = make_gateway(
            lambda request: httpx.Response(
                403, json={"error_code": "otp_expired", "msg": "Token has expired or is invalid"}
            ),
            store,
        )

        result = await gateway.verify_otp("student@berkeley.edu", "123456")

        assert result.status == OTPStatus.EXPIRED
        assert result.session is None
        assert store.load() is None

    @pytest.mark.asyncio
    async def test_invalid_code(self):
        gateway = make_gateway(
            lambda request: httpx.Response(400, json={"error_code": "validation_failed"})
        )

        result = await gateway.verify_otp("student@berkeley.edu", "123456")

        assert result.status == OTPStatus.INVALID

    @pytest.mark.asyncio
    async def test_server_error(self):
        gateway = make_gateway(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(NetworkError) as exc_info:
            await gateway.verify_otp("student@berkeley.edu", "123456")

        assert exc_info.value.reason == NetworkError.UNAVAILABLE


class TestCurrentSession:
    """Tests for current_session."""

    @pytest.mark.asyncio
    async def test_no_stored_session(self):
        gateway = make_gateway(lambda request: httpx.Response(500))

        assert await gateway.current_session() is None

    @pytest.mark.asyncio
    async def test_valid_stored_session(self):
        store = MemoryTokenStore()
        store.save(stored_session())

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/auth/v1/user"
            assert request.headers["Authorization"] == "Bearer access-0"
            return httpx.Response(200, json={"id": str(USER_ID)})

        gateway = make_gateway(handler, store)

        session = await gateway.current_session()

        assert session.user_id == USER_ID

    @pytest.mark.asyncio
    async def test_expired_token_is_refreshed(self):
        store = MemoryTokenStore()
        store.save(stored_session(expires_in=timedelta(seconds=-10)))

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/auth/v1/token"
            assert request.url.params["grant_type"] == "refresh_token"
            assert json.loads(request.content) == {"refresh_token": "refresh-0"}
            return httpx.Response(200, json=token_payload())

        gateway = make_gateway(handler, store)

        session = await gateway.current_session()

        assert session.user_id == USER_ID
        assert store.load().refresh_token == "refresh-1"

    @pytest.mark.asyncio
    async def test_rejected_refresh_forgets_session(self):
        store = MemoryTokenStore()
        store.save(stored_session(expires_in=timedelta(seconds=-10)))
        gateway = make_gateway(
            lambda request: httpx.Response(400, json={"error_code": "refresh_token_not_found"}),
            store,
        )

        assert await gateway.current_session() is None
        assert store.load() is None


class TestSignOut:
    """Tests for sign_out."""

    @pytest.mark.asyncio
    async def test_logs_out_and_clears_store(self):
        store = MemoryTokenStore()
        store.save(stored_session())
        paths = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(204)

        gateway = make_gateway(handler, store)

        await gateway.sign_out()

        assert paths == ["/auth/v1/logout"]
        assert store.load() is None

    @pytest.mark.asyncio
    async def test_revoked_token_is_not_an_error(self):
        store = MemoryTokenStore()
        store.save(stored_session())
        gateway = make_gateway(lambda request: httpx.Response(401, json={}), store)

        await gateway.sign_out()

        assert store.load() is None

    @pytest.mark.asyncio
    async def test_store_cleared_even_when_unreachable(self):
        store = MemoryTokenStore()
        store.save(stored_session())

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        gateway = make_gateway(handler, store)

        with pytest.raises(NetworkError) as exc_info:
            await gateway.sign_out()

        assert exc_info.value.reason == NetworkError.TIMEOUT
        assert store.load() is None
