"""Supabase PostgREST table gateway.

Filters are translated to PostgREST operators (``eq``, ``in``, ``is``).
Uniqueness violations come back as HTTP 409 with Postgres code 23505 and
are raised as DuplicateRowError. Counters go through the
``increment_counter`` database function so the add happens in one
statement on the server.
"""

import json
import re
from typing import Any, Optional

import httpx
import logfire
from pydantic_core import to_jsonable_python

from courseloop.adapter.error import ProviderError
from courseloop.adapter.supabase.http import error_body, raise_if_unavailable, transport_errors
from courseloop.adapter.supabase.token_store import TokenStore
from courseloop.domain.error import DuplicateRowError
from courseloop.domain.gateway import Filters, Order, Row, TableGateway
from courseloop.domain.gateway.table import is_membership
from courseloop.domain.value import Table

UNIQUE_VIOLATION = "23505"
INCREMENT_FUNCTION = "increment_counter"

_KEY_COLUMNS = re.compile(r"Key \(([^)]*)\)=")


def _scalar(value: Any) -> str:
    encoded = to_jsonable_python(value)
    return encoded if isinstance(encoded, str) else json.dumps(encoded)


def _quoted(value: Any) -> str:
    text = _scalar(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def encode_filters(filters: Optional[Filters]) -> Optional[dict[str, str]]:
    """PostgREST query params for equality / membership filters.

    Returns None when a membership filter is empty, since nothing can match.
    """
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        if is_membership(value):
            if not value:
                return None
            params[column] = "in.(" + ",".join(_quoted(v) for v in value) + ")"
        elif value is None:
            params[column] = "is.null"
        else:
            params[column] = f"eq.{_scalar(value)}"
    return params


def duplicate_columns(body: dict[str, Any]) -> tuple[str, ...]:
    """Violated key columns from a 23505 error payload, if reported."""
    match = _KEY_COLUMNS.search(body.get("details") or "")
    if not match:
        return ()
    return tuple(column.strip() for column in match.group(1).split(","))


class SupabaseTableGateway(TableGateway):
    """Row access through ``/rest/v1``, as the signed-in user when there is one."""

    def __init__(
        self, client: httpx.AsyncClient, token_store: TokenStore, anon_key: str
    ) -> None:
        """Initialize table gateway.

        Args:
            client: Shared client with base_url and apikey header set
            token_store: Source of the user's access token for row-level security
            anon_key: Bearer used when nobody is signed in
        """
        self.client = client
        self.token_store = token_store
        self.anon_key = anon_key

    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        order: Optional[list[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        params = encode_filters(filters)
        if params is None:
            return []
        params["select"] = "*"
        if order:
            params["order"] = ",".join(
                f"{key.column}.{'desc' if key.descending else 'asc'}" for key in order
            )
        if limit is not None:
            params["limit"] = str(limit)

        response = await self._request("GET", f"/rest/v1/{table.value}", table, params=params)
        return response.json()

    async def insert(self, table: Table, row: Row) -> Row:
        response = await self._request(
            "POST",
            f"/rest/v1/{table.value}",
            table,
            payload=to_jsonable_python(row),
            headers={"Prefer": "return=representation"},
        )
        return response.json()[0]

    async def update(self, table: Table, patch: Row, filters: Filters) -> int:
        params = encode_filters(filters)
        if params is None:
            return 0
        response = await self._request(
            "PATCH",
            f"/rest/v1/{table.value}",
            table,
            params=params,
            payload=to_jsonable_python(patch),
            headers={"Prefer": "return=representation"},
        )
        return len(response.json())

    async def increment(
        self, table: Table, field: str, filters: Filters, delta: int = 1
    ) -> int:
        if set(filters) != {"id"} or is_membership(filters["id"]):
            raise ValueError("increment_counter only targets a single row by id")
        response = await self._request(
            "POST",
            f"/rest/v1/rpc/{INCREMENT_FUNCTION}",
            table,
            payload={
                "target_table": table.value,
                "target_column": field,
                "row_id": _scalar(filters["id"]),
                "delta": delta,
            },
        )
        return int(response.json())

    async def _request(
        self,
        method: str,
        path: str,
        table: Table,
        params: Optional[dict[str, str]] = None,
        payload: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        stored = self.token_store.load()
        bearer = stored.access_token if stored else self.anon_key
        operation = f"{method} {table.value}"

        with transport_errors(operation):
            response = await self.client.request(
                method,
                path,
                params=params,
                json=payload,
                headers={"Authorization": f"Bearer {bearer}", **(headers or {})},
            )

        raise_if_unavailable(response, operation)
        if response.is_error:
            body = error_body(response)
            if response.status_code == 409 and body.get("code") == UNIQUE_VIOLATION:
                raise DuplicateRowError(table.value, duplicate_columns(body))
            logfire.error(
                "Supabase request rejected",
                operation=operation,
                status_code=response.status_code,
                code=body.get("code"),
                message=body.get("message"),
            )
            raise ProviderError(
                "supabase", response.status_code, body.get("message") or response.text
            )
        return response
