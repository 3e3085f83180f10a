"""Integration tests for SqlCounterReconciler.

These tests run the reconciliation statements against a real SQLite
database created from the table definitions.
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import create_async_engine

from courseloop.persistence.database import create_schema
from courseloop.persistence.reconciler import SqlCounterReconciler
from courseloop.persistence.tables import (
    comments_table,
    courses_table,
    posts_table,
    profiles_table,
)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/courseloop.db")
    await create_schema(engine)
    yield engine
    await engine.dispose()


async def seed(engine, comment_count: int, actual_comments: int):
    """Create a post whose stored counter may disagree with its comments."""
    user_id = uuid4()
    post_id = uuid4()
    async with engine.begin() as conn:
        await conn.execute(insert(profiles_table).values(id=user_id, username=f"u{user_id.hex[:8]}"))
        await conn.execute(
            insert(posts_table).values(
                id=post_id,
                user_id=user_id,
                content="Office hours moved?",
                course_code="CS101",
                comment_count=comment_count,
            )
        )
        for _ in range(actual_comments):
            await conn.execute(
                insert(comments_table).values(
                    id=uuid4(), post_id=post_id, user_id=user_id, content="Yes"
                )
            )
    return post_id


async def stored_count(engine, post_id):
    async with engine.connect() as conn:
        result = await conn.execute(
            select(posts_table.c.comment_count).where(posts_table.c.id == post_id)
        )
        return result.scalar_one()


class TestSqlCounterReconciler:
    """Integration tests for SqlCounterReconciler."""

    @pytest.mark.asyncio
    async def test_repairs_drifted_counts(self, engine):
        # Arrange
        consistent = await seed(engine, comment_count=2, actual_comments=2)
        behind = await seed(engine, comment_count=0, actual_comments=3)
        ahead = await seed(engine, comment_count=4, actual_comments=1)

        # Act
        report = await SqlCounterReconciler(engine).reconcile_comment_counts()

        # Assert
        assert report.checked == 3
        assert report.corrected == {behind: (0, 3), ahead: (4, 1)}
        assert await stored_count(engine, consistent) == 2
        assert await stored_count(engine, behind) == 3
        assert await stored_count(engine, ahead) == 1

    @pytest.mark.asyncio
    async def test_scoped_to_given_posts(self, engine):
        target = await seed(engine, comment_count=0, actual_comments=1)
        untouched = await seed(engine, comment_count=5, actual_comments=0)

        report = await SqlCounterReconciler(engine).reconcile_comment_counts([target])

        assert report.checked == 1
        assert report.corrected == {target: (0, 1)}
        assert await stored_count(engine, untouched) == 5

    @pytest.mark.asyncio
    async def test_second_run_finds_nothing(self, engine):
        await seed(engine, comment_count=0, actual_comments=2)
        reconciler = SqlCounterReconciler(engine)
        await reconciler.reconcile_comment_counts()

        report = await reconciler.reconcile_comment_counts()

        assert report.corrected == {}


class TestSchemaConstraints:
    """The schema enforces the keys the services rely on."""

    @pytest.mark.asyncio
    async def test_course_identity_is_unique(self, engine):
        async with engine.begin() as conn:
            await conn.execute(
                insert(courses_table).values(id=uuid4(), course_code="CS101", professor_name="Smith")
            )

        with pytest.raises(IntegrityError):
            async with engine.begin() as conn:
                await conn.execute(
                    insert(courses_table).values(
                        id=uuid4(), course_code="CS101", professor_name="Smith"
                    )
                )

    @pytest.mark.asyncio
    async def test_counters_cannot_go_negative(self, engine):
        post_id = await seed(engine, comment_count=0, actual_comments=0)

        with pytest.raises(IntegrityError):
            async with engine.begin() as conn:
                await conn.execute(
                    posts_table.update()
                    .where(posts_table.c.id == post_id)
                    .values(like_count=-1)
                )
