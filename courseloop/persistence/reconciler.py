"""Set-based counter reconciliation over a direct database connection."""

from typing import Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from courseloop.domain.service import ReconciliationReport
from courseloop.domain.value import PostId
from courseloop.persistence.tables import comments_table, posts_table


class SqlCounterReconciler:
    """Repairs ``posts.comment_count`` with one correlated UPDATE.

    Each post's counter is rewritten from the live comment count inside a
    single statement, so no comment committed before the statement runs
    can be missed.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def reconcile_comment_counts(
        self, post_ids: Optional[list[PostId]] = None
    ) -> ReconciliationReport:
        """Rewrite drifted comment counts.

        Args:
            post_ids: Posts to check (None for all posts)

        Returns:
            Report mapping each corrected post to (old, new) counts
        """
        actual = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == posts_table.c.id)
            .scalar_subquery()
        )
        drifted = posts_table.c.comment_count != actual
        scope = posts_table.c.id.in_(post_ids) if post_ids is not None else None

        with logfire.span("sql_counter_reconciler.reconcile_comment_counts"):
            async with self.engine.begin() as conn:
                checked_query = select(func.count()).select_from(posts_table)
                drifted_query = select(
                    posts_table.c.id, posts_table.c.comment_count, actual.label("actual")
                ).where(drifted)
                repair = update(posts_table).values(comment_count=actual).where(drifted)
                if scope is not None:
                    checked_query = checked_query.where(scope)
                    drifted_query = drifted_query.where(scope)
                    repair = repair.where(scope)

                checked = (await conn.execute(checked_query)).scalar_one()
                rows = (await conn.execute(drifted_query)).all()
                await conn.execute(repair)

            report = ReconciliationReport(checked=checked)
            for row in rows:
                report.corrected[PostId(row.id)] = (row.comment_count, row.actual)
                logfire.info(
                    "Comment count corrected",
                    post_id=str(row.id),
                    stored=row.comment_count,
                    actual=row.actual,
                )

            logfire.info(
                "Comment counts reconciled",
                checked=report.checked,
                corrected=len(report.corrected),
            )
            return report
