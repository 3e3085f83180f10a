"""BackendGateway: the single capability services receive.

Combines the auth and row halves of the backend and bounds every call with
the caller-level timeout, so a stalled request surfaces as
``NetworkError(timeout)`` instead of hanging the caller.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

import logfire

from courseloop.domain.error import NetworkError
from courseloop.domain.gateway.auth import AuthGateway, OTPVerification, RemoteSession
from courseloop.domain.gateway.table import Filters, Order, Row, TableGateway
from courseloop.domain.value import Table

T = TypeVar("T")


class BackendGateway:
    """Remote persistence + auth backend, injected into every service."""

    def __init__(
        self,
        auth: AuthGateway,
        tables: TableGateway,
        request_timeout: float = 15.0,
    ) -> None:
        """Initialize backend gateway.

        Args:
            auth: Email-OTP auth implementation
            tables: Row access implementation
            request_timeout: Seconds before a single call is abandoned
        """
        self.auth = auth
        self.tables = tables
        self.request_timeout = request_timeout

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.request_timeout)
        except asyncio.TimeoutError:
            logfire.warn(
                "Backend call timed out",
                operation=operation,
                timeout=self.request_timeout,
            )
            raise NetworkError(NetworkError.TIMEOUT, operation) from None

    # Auth

    async def send_otp(self, email: str) -> None:
        await self._call("send_otp", self.auth.send_otp(email))

    async def verify_otp(self, email: str, code: str) -> OTPVerification:
        return await self._call("verify_otp", self.auth.verify_otp(email, code))

    async def current_session(self) -> Optional[RemoteSession]:
        return await self._call("current_session", self.auth.current_session())

    async def sign_out(self) -> None:
        await self._call("sign_out", self.auth.sign_out())

    # Rows

    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        order: Optional[list[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        return await self._call(
            f"select:{table.value}",
            self.tables.select(table, filters=filters, order=order, limit=limit),
        )

    async def insert(self, table: Table, row: Row) -> Row:
        return await self._call(f"insert:{table.value}", self.tables.insert(table, row))

    async def update(self, table: Table, patch: Row, filters: Filters) -> int:
        return await self._call(
            f"update:{table.value}", self.tables.update(table, patch, filters)
        )

    async def increment(
        self, table: Table, field: str, filters: Filters, delta: int = 1
    ) -> int:
        return await self._call(
            f"increment:{table.value}.{field}",
            self.tables.increment(table, field, filters, delta),
        )
