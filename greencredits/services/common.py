"""Table-oriented store abstraction shared by every service.

Services never touch process globals: they receive a ``Store`` and read or
write plain JSON-compatible rows keyed by an ``id`` column. ``MemoryStore``
keeps everything in process memory (lost on restart); ``SupabaseStore``
maps the same calls onto PostgREST tables.
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from collections import defaultdict
from typing import Any, Protocol

from postgrest import APIError

from greencredits.config import settings
from greencredits.utils.errors import InvalidInputError
from supabase import Client

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class Store(Protocol):
    """Minimal key/value-with-scan contract the services depend on."""

    def get(self, table: str, key: str | int) -> Row | None: ...

    def put(self, table: str, row: Row) -> Row: ...

    def scan(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Row]: ...

    def count(self, table: str, filters: dict[str, Any] | None = None) -> int: ...

    def next_id(self, table: str) -> int: ...


def _matches(row: Row, filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(row.get(key) == value for key, value in filters.items())


class MemoryStore:
    """In-process store; rows are copied on the way in and out."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, Row]] = defaultdict(dict)
        self._counters: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def get(self, table: str, key: str | int) -> Row | None:
        with self._lock:
            row = self._tables[table].get(str(key))
            return copy.deepcopy(row) if row is not None else None

    def put(self, table: str, row: Row) -> Row:
        if "id" not in row:
            raise InvalidInputError(f"Row for {table} is missing an id")
        stored = copy.deepcopy(row)
        with self._lock:
            self._tables[table][str(row["id"])] = stored
        return copy.deepcopy(stored)

    def scan(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Row]:
        with self._lock:
            rows = [copy.deepcopy(row) for row in self._tables[table].values()]

        rows = [row for row in rows if _matches(row, filters)]
        if order_by:
            # None sorts first ascending and last descending.
            rows.sort(
                key=lambda row: (row.get(order_by) is not None, row.get(order_by)),
                reverse=descending,
            )
        if offset:
            rows = rows[offset:]
        if limit:
            rows = rows[:limit]
        return rows

    def count(self, table: str, filters: dict[str, Any] | None = None) -> int:
        with self._lock:
            return sum(1 for row in self._tables[table].values() if _matches(row, filters))

    def next_id(self, table: str) -> int:
        with self._lock:
            self._counters[table] += 1
            return self._counters[table]


class SupabaseStore:
    """Store backed by Supabase tables with an ``id`` primary key."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def execute(self, query, default: Any = None) -> Any:
        """Execute a Supabase query and normalize API errors."""
        started = time.perf_counter()
        try:
            response = query.execute()
            elapsed_ms = (time.perf_counter() - started) * 1000
            threshold_ms = settings.slow_query_log_threshold_ms
            if threshold_ms > 0 and elapsed_ms >= threshold_ms:
                logger.warning("Slow Supabase query %.1fms", elapsed_ms)
            data = response.data
            return default if data is None and default is not None else data
        except APIError as exc:
            message = getattr(exc, "message", "Database request failed")
            raise InvalidInputError(str(message)) from exc

    def get(self, table: str, key: str | int) -> Row | None:
        rows = self.execute(
            self.client.table(table).select("*").eq("id", key).limit(1),
            default=[],
        )
        return rows[0] if rows else None

    def put(self, table: str, row: Row) -> Row:
        if "id" not in row:
            raise InvalidInputError(f"Row for {table} is missing an id")
        rows = self.execute(self.client.table(table).upsert(row), default=[])
        if not rows:
            raise InvalidInputError(f"Failed to write to {table}")
        return rows[0]

    def scan(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Row]:
        query = self.client.table(table).select("*")
        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return self.execute(query, default=[])

    def count(self, table: str, filters: dict[str, Any] | None = None) -> int:
        query = self.client.table(table).select("*", count="exact", head=True)
        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)
        try:
            response = query.execute()
            return response.count or 0
        except APIError as exc:
            message = getattr(exc, "message", "Database request failed")
            raise InvalidInputError(str(message)) from exc

    def next_id(self, table: str) -> int:
        # Relies on the single-writer-per-process deployment model.
        rows = self.execute(
            self.client.table(table).select("id").order("id", desc=True).limit(1),
            default=[],
        )
        return int(rows[0]["id"]) + 1 if rows else 1


def group_by(rows: list[Row], key: str) -> dict[str, list[Row]]:
    """Group rows by an arbitrary key."""
    grouped: dict[str, list[Row]] = defaultdict(list)
    for row in rows:
        grouped[str(row[key])].append(row)
    return grouped
