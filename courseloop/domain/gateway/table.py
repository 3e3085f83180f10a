"""Row half of the backend contract: generic per-table access."""

from abc import ABC, abstractmethod
from typing import Any, Collection, Mapping, Optional

from courseloop.domain.value import Table
from courseloop.domain.value.common import ValueObject

Row = dict[str, Any]

# Column -> value. A list/tuple/set value means "column IN values".
Filters = Mapping[str, Any]


class Order(ValueObject):
    """Sort key for select()."""

    column: str
    descending: bool = True


def is_membership(value: Any) -> bool:
    """Whether a filter value means "column IN values"."""
    return isinstance(value, Collection) and not isinstance(value, (str, bytes))


def matches(row: Mapping[str, Any], filters: Optional[Filters]) -> bool:
    """Whether a row satisfies equality / membership filters."""
    for column, expected in (filters or {}).items():
        value = row.get(column)
        if is_membership(expected):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class TableGateway(ABC):
    """Create/read/update/query access to backend tables.

    Uniqueness is enforced by the backend: ``insert`` raises
    ``DuplicateRowError`` when a unique key already exists.
    """

    @abstractmethod
    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        order: Optional[list[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        """Return rows matching all filters."""
        pass

    @abstractmethod
    async def insert(self, table: Table, row: Row) -> Row:
        """Insert one row and return it as stored.

        Raises:
            DuplicateRowError: If a unique key already exists
        """
        pass

    @abstractmethod
    async def update(self, table: Table, patch: Row, filters: Filters) -> int:
        """Apply ``patch`` to matching rows. Returns the number of rows matched.

        Raises:
            DuplicateRowError: If the patch collides with a unique key
        """
        pass

    @abstractmethod
    async def increment(
        self, table: Table, field: str, filters: Filters, delta: int = 1
    ) -> int:
        """Atomically add ``delta`` to ``field`` server-side.

        Must be a single indivisible backend operation, never a
        read-modify-write. Returns the number of rows matched.
        """
        pass
