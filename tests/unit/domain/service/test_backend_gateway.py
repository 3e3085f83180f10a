"""Unit tests for BackendGateway."""

import asyncio
from typing import Optional

import pytest

from courseloop.adapter.inmemory import InMemoryAuthGateway, InMemoryTableGateway
from courseloop.domain.error import NetworkError
from courseloop.domain.gateway import BackendGateway, Filters, Order, Row
from courseloop.domain.value import Table


class StalledTableGateway(InMemoryTableGateway):
    """Table gateway whose selects never return."""

    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        order: Optional[list[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        await asyncio.Event().wait()
        return []


class TestBackendGateway:
    """Tests for timeout handling and delegation."""

    @pytest.mark.asyncio
    async def test_stalled_call_raises_timeout(self):
        backend = BackendGateway(
            InMemoryAuthGateway(), StalledTableGateway(), request_timeout=0.05
        )

        with pytest.raises(NetworkError) as exc_info:
            await backend.select(Table.POSTS)

        assert exc_info.value.reason == NetworkError.TIMEOUT
        assert "select:posts" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_delegates_to_table_gateway(self):
        tables = InMemoryTableGateway()
        backend = BackendGateway(InMemoryAuthGateway(), tables)

        await backend.insert(Table.COURSES, {"id": 1, "course_code": "CS101", "professor_name": "Smith"})
        rows = await backend.select(Table.COURSES, {"course_code": "CS101"})

        assert rows == tables.rows(Table.COURSES)
