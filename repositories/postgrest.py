"""Async client for the remote table service's PostgREST HTTP API.

Only the subset of the query language the repositories need is supported:
column selection, ``eq`` filters, ``or`` groups of ``ilike`` conditions, ordering and
limits, plus insert/update/delete with ``Prefer: return=representation`` so
writes return the affected rows.
"""

import json
import logging
from typing import Any, Optional

import httpx

from config.exceptions import RemoteServiceError, RowNotFoundError

logger = logging.getLogger(__name__)

NO_ROWS_CODE = "PGRST116"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def quote_value(value: str) -> str:
    """Double-quote a filter value for use inside an ``or=(...)`` group."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _error_from_response(response: httpx.Response, table: str) -> RemoteServiceError:
    code = None
    message = response.reason_phrase or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        body = None
    if isinstance(body, dict):
        code = body.get("code")
        message = body.get("message") or message
    if code == NO_ROWS_CODE:
        return RowNotFoundError(f"{table}: {message}", status=response.status_code)
    return RemoteServiceError(f"{table}: {message}", code=code, status=response.status_code)


class TableQuery:
    """Chainable request builder for one table."""

    def __init__(self, client: "RemoteClient", table: str):
        self._client = client
        self._table = table
        self._columns = "*"
        self._filters: list[tuple[str, str]] = []
        self._order: Optional[str] = None
        self._limit: Optional[int] = None

    def select(self, columns: str = "*") -> "TableQuery":
        self._columns = columns
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{value}"))
        return self

    def or_(self, *conditions: str) -> "TableQuery":
        self._filters.append(("or", f"({','.join(conditions)})"))
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self._order = f"{column}.{'asc' if ascending else 'desc'}"
        return self

    def limit(self, count: int) -> "TableQuery":
        self._limit = count
        return self

    def _params(self, include_select: bool = True) -> list[tuple[str, str]]:
        params = []
        if include_select:
            params.append(("select", self._columns))
        params.extend(self._filters)
        if self._order:
            params.append(("order", self._order))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        return params

    async def execute(self) -> list[dict]:
        return await self._client.request("GET", self._table, self._params())

    async def single(self) -> dict:
        """Return exactly one row; raise RowNotFoundError when none match."""
        rows = await self.execute()
        if not rows:
            raise RowNotFoundError(f"{self._table}: no rows matched")
        if len(rows) > 1:
            raise RemoteServiceError(f"{self._table}: expected one row, got {len(rows)}")
        return rows[0]

    async def maybe_single(self) -> Optional[dict]:
        """Return the single matching row, or None."""
        rows = await self.execute()
        if len(rows) > 1:
            raise RemoteServiceError(f"{self._table}: expected at most one row, got {len(rows)}")
        return rows[0] if rows else None

    async def insert(self, row: dict) -> list[dict]:
        return await self._client.request(
            "POST", self._table, [("select", self._columns)], body=row, returning=True,
        )

    async def update(self, values: dict) -> list[dict]:
        return await self._client.request(
            "PATCH", self._table, self._params(), body=values, returning=True,
        )

    async def delete(self) -> list[dict]:
        return await self._client.request(
            "DELETE", self._table, self._params(), returning=True,
        )


class RemoteClient:
    """Thin async wrapper around ``httpx.AsyncClient`` for the table API."""

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    async def request(
        self,
        method: str,
        table: str,
        params: list[tuple[str, str]],
        body: Optional[dict] = None,
        returning: bool = False,
    ) -> list[dict]:
        headers = {"Prefer": "return=representation"} if returning else {}
        logger.debug("%s /%s params=%s", method, table, params)
        try:
            response = await self._http.request(
                method, f"/{table}", params=params, json=body, headers=headers,
            )
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"{table}: request failed: {e}") from e

        if response.is_error:
            error = _error_from_response(response, table)
            logger.debug("%s /%s -> %d %s", method, table, response.status_code, error)
            raise error

        if not response.content:
            return []
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise RemoteServiceError(f"{table}: invalid JSON response", status=response.status_code) from e
        if isinstance(data, dict):
            return [data]
        return data

    async def aclose(self) -> None:
        await self._http.aclose()
