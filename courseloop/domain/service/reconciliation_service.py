"""Counter reconciliation: the backstop for eventually-consistent counters.

``comment_count`` is a cache of the number of comment rows. When a
comment's counter increment fails, this job recomputes the count from the
child rows. It is a maintenance job, never part of a user request.

This portable variant works through the BackendGateway and is not atomic
with respect to concurrent comments; a comment landing between the count
and the write is corrected on the next run. Against Postgres prefer
``courseloop.persistence.reconciler.SqlCounterReconciler``, which does the
whole repair in one statement.
"""

from collections import Counter
from dataclasses import dataclass, field
from uuid import UUID

import logfire

from courseloop.domain.gateway import BackendGateway
from courseloop.domain.value import PostId, Table

from .base import Service


@dataclass
class ReconciliationReport:
    """Posts examined and the ones whose counter was corrected."""

    checked: int = 0
    corrected: dict[PostId, tuple[int, int]] = field(default_factory=dict)


class CounterReconciliationService(Service):
    """Recomputes post comment counts from actual comment rows."""

    def __init__(self, backend: BackendGateway) -> None:
        """Initialize reconciliation service.

        Args:
            backend: Backend gateway (service credentials, no user session)
        """
        self.backend = backend

    async def reconcile_comment_counts(
        self, post_ids: list[PostId] | None = None
    ) -> ReconciliationReport:
        """Rewrite ``comment_count`` wherever it drifted from the true count.

        Args:
            post_ids: Posts to check (None for all posts)

        Returns:
            Report mapping each corrected post to (old, new) counts
        """
        with logfire.span("reconciliation_service.reconcile_comment_counts"):
            post_filters = {"id": post_ids} if post_ids is not None else None
            posts = await self.backend.select(Table.POSTS, post_filters)
            comment_filters = (
                {"post_id": [p["id"] for p in posts]} if post_ids is not None else None
            )
            comments = await self.backend.select(Table.COMMENTS, comment_filters)
            actual = Counter(str(c["post_id"]) for c in comments)

            report = ReconciliationReport(checked=len(posts))
            for post in posts:
                stored = post.get("comment_count", 0)
                true_count = actual.get(str(post["id"]), 0)
                if stored == true_count:
                    continue
                await self.backend.update(
                    Table.POSTS, {"comment_count": true_count}, {"id": post["id"]}
                )
                report.corrected[PostId(UUID(str(post["id"])))] = (stored, true_count)
                logfire.info(
                    "Comment count corrected",
                    post_id=str(post["id"]),
                    stored=stored,
                    actual=true_count,
                )

            logfire.info(
                "Comment counts reconciled",
                checked=report.checked,
                corrected=len(report.corrected),
            )
            return report
