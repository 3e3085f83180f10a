"""In-memory table gateway for testing.

Behaves like the relational backend where it matters for the core:
unique keys are enforced atomically at write time and increments are
applied in place. Every call yields to the event loop first, so
concurrent callers interleave the way they would against a remote store.
"""

import asyncio
from collections import defaultdict
from typing import Any, Optional

from courseloop.domain.error import DuplicateRowError
from courseloop.domain.gateway import Filters, Order, Row, TableGateway, matches
from courseloop.domain.value import Table

UNIQUE_KEYS: dict[Table, list[tuple[str, ...]]] = {
    Table.PROFILES: [("id",), ("username",)],
    Table.POSTS: [("id",)],
    Table.COMMENTS: [("id",)],
    Table.COURSES: [("id",), ("course_code", "professor_name")],
    Table.USER_COURSES: [("user_id", "course_id")],
}


class InMemoryTableGateway(TableGateway):
    """In-memory implementation of TableGateway for testing."""

    def __init__(self, latency: float = 0.0) -> None:
        self._rows: dict[Table, list[Row]] = {table: [] for table in Table}
        self._latency = latency
        self._failures: dict[tuple[str, Table], list[Exception]] = defaultdict(list)
        self.calls: list[tuple[str, Table]] = []

    def fail_next(self, operation: str, table: Table, error: Exception) -> None:
        """Make the next ``operation`` ("select", "insert", ...) on ``table`` raise."""
        self._failures[(operation, table)].append(error)

    def rows(self, table: Table) -> list[Row]:
        """Snapshot of a table, for assertions."""
        return [dict(row) for row in self._rows[table]]

    async def _enter(self, operation: str, table: Table) -> None:
        self.calls.append((operation, table))
        await asyncio.sleep(self._latency)
        pending = self._failures.get((operation, table))
        if pending:
            raise pending.pop(0)

    def _violated_key(
        self, table: Table, candidate: Row, ignore: Optional[Row] = None
    ) -> Optional[tuple[str, ...]]:
        for key in UNIQUE_KEYS[table]:
            values = tuple(candidate.get(column) for column in key)
            if any(value is None for value in values):
                continue
            for row in self._rows[table]:
                if row is ignore:
                    continue
                if tuple(row.get(column) for column in key) == values:
                    return key
        return None

    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        order: Optional[list[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        """Return rows matching all filters."""
        await self._enter("select", table)
        rows = [dict(row) for row in self._rows[table] if matches(row, filters)]
        for key in reversed(order or []):
            rows.sort(key=lambda r: r[key.column], reverse=key.descending)
        return rows[:limit] if limit is not None else rows

    async def insert(self, table: Table, row: Row) -> Row:
        """Insert one row, enforcing unique keys."""
        await self._enter("insert", table)
        violated = self._violated_key(table, row)
        if violated:
            raise DuplicateRowError(table.value, violated)
        stored = dict(row)
        self._rows[table].append(stored)
        return dict(stored)

    async def update(self, table: Table, patch: Row, filters: Filters) -> int:
        """Apply patch to matching rows."""
        await self._enter("update", table)
        targets = [row for row in self._rows[table] if matches(row, filters)]
        for row in targets:
            violated = self._violated_key(table, {**row, **patch}, ignore=row)
            if violated:
                raise DuplicateRowError(table.value, violated)
        for row in targets:
            row.update(patch)
        return len(targets)

    async def increment(
        self, table: Table, field: str, filters: Filters, delta: int = 1
    ) -> int:
        """Add delta in place; no await between read and write."""
        await self._enter("increment", table)
        targets = [row for row in self._rows[table] if matches(row, filters)]
        for row in targets:
            current: Any = row.get(field) or 0
            row[field] = current + delta
        return len(targets)
