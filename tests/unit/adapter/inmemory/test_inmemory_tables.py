"""Unit tests for the in-memory table gateway."""

from uuid import uuid4

import pytest

from courseloop.adapter.inmemory import InMemoryTableGateway
from courseloop.domain.error import DuplicateRowError, NetworkError
from courseloop.domain.gateway import Order
from courseloop.domain.value import Table


class TestInMemoryTableGateway:
    """Tests for InMemoryTableGateway."""

    @pytest.mark.asyncio
    async def test_composite_unique_key(self):
        tables = InMemoryTableGateway()
        await tables.insert(
            Table.COURSES, {"id": uuid4(), "course_code": "CS101", "professor_name": "Smith"}
        )

        with pytest.raises(DuplicateRowError) as exc_info:
            await tables.insert(
                Table.COURSES, {"id": uuid4(), "course_code": "CS101", "professor_name": "Smith"}
            )

        assert exc_info.value.columns == ("course_code", "professor_name")
        assert len(tables.rows(Table.COURSES)) == 1

    @pytest.mark.asyncio
    async def test_null_username_is_not_unique(self):
        tables = InMemoryTableGateway()

        await tables.insert(Table.PROFILES, {"id": uuid4(), "username": None})
        await tables.insert(Table.PROFILES, {"id": uuid4(), "username": None})

        assert len(tables.rows(Table.PROFILES)) == 2

    @pytest.mark.asyncio
    async def test_select_orders_and_limits(self):
        tables = InMemoryTableGateway()
        for likes in (3, 7, 5):
            await tables.insert(Table.POSTS, {"id": uuid4(), "like_count": likes})

        rows = await tables.select(
            Table.POSTS, order=[Order(column="like_count")], limit=2
        )

        assert [row["like_count"] for row in rows] == [7, 5]

    @pytest.mark.asyncio
    async def test_update_rejects_key_collision(self):
        tables = InMemoryTableGateway()
        first = uuid4()
        await tables.insert(Table.PROFILES, {"id": first, "username": "Taken1"})
        await tables.insert(Table.PROFILES, {"id": uuid4(), "username": "Other2"})

        with pytest.raises(DuplicateRowError):
            await tables.update(Table.PROFILES, {"username": "Taken1"}, {"username": "Other2"})

        assert {row["username"] for row in tables.rows(Table.PROFILES)} == {"Taken1", "Other2"}

    @pytest.mark.asyncio
    async def test_injected_failure_fires_once(self):
        tables = InMemoryTableGateway()
        tables.fail_next("select", Table.POSTS, NetworkError(NetworkError.TRANSPORT))

        with pytest.raises(NetworkError):
            await tables.select(Table.POSTS)

        assert await tables.select(Table.POSTS) == []
