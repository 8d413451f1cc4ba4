"""Table access through the project's PostgREST endpoint."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from loguru import logger

from src.catalog_admin.core.errors import DatabaseError, database_error_from_payload
from src.catalog_admin.core.services.supabase.client import SupabaseClient, response_payload

Row = dict[str, Any]

_RETURN_ROWS = {"Prefer": "return=representation"}


def eq_filters(filters: Mapping[str, Any] | None) -> dict[str, str]:
    """Translate ``{"slug": "x"}`` into PostgREST ``{"slug": "eq.x"}`` params."""
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        if value is None:
            params[column] = "is.null"
        elif isinstance(value, bool):
            params[column] = f"eq.{str(value).lower()}"
        else:
            params[column] = f"eq.{value}"
    return params


class DatabaseService:
    """Insert, update, delete and select rows of a table.

    Every call is a single request; constraint failures surface as the
    matching ``ConstraintViolation`` subclass with the SQLSTATE code intact.
    """

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def _execute(
        self,
        method: str,
        table: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> list[Row]:
        try:
            response = await self._client.request(
                method, f"/rest/v1/{table}", params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.bind(table=table, method=method).error("database.transport_error: {}", exc)
            raise DatabaseError(f"Database request failed: {exc}") from exc

        payload = response_payload(response)
        if response.is_error:
            error = database_error_from_payload(payload, response.status_code)
            logger.bind(
                table=table, method=method, status_code=response.status_code, code=error.code
            ).warning("database.error: {}", error.message)
            raise error

        if payload is None:
            return []
        if isinstance(payload, list):
            return payload
        return [payload]

    async def insert(self, table: str, row: Row | Sequence[Row]) -> list[Row]:
        """Insert one row (or several) and return what was stored."""
        return await self._execute("POST", table, json=row, headers=_RETURN_ROWS)

    async def update(self, table: str, patch: Row, filters: Mapping[str, Any]) -> list[Row]:
        """Apply ``patch`` to every row matching ``filters``; returns updated rows."""
        if not filters:
            raise ValueError("update requires at least one filter")
        return await self._execute(
            "PATCH", table, params=eq_filters(filters), json=patch, headers=_RETURN_ROWS
        )

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        """Delete every row matching ``filters``; returns the deleted rows."""
        if not filters:
            raise ValueError("delete requires at least one filter")
        return await self._execute(
            "DELETE", table, params=eq_filters(filters), headers=_RETURN_ROWS
        )

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        columns: str = "*",
        order: str | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        """Read rows matching ``filters``."""
        params: dict[str, Any] = {"select": columns, **eq_filters(filters)}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        return await self._execute("GET", table, params=params)
