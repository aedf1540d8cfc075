"""
SQLite implementation of the search analytics log.

Keywords and result snapshots are stored as JSON columns.
"""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

import aiosqlite

from smartsearch.config import get_logger
from smartsearch.core.entities.search_log import (
    SearchLog,
    SearchPerformance,
    SearchResultLog,
)
from smartsearch.core.interfaces.storage import ISearchLogStore
from smartsearch.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


class SQLiteSearchLogStore(ISearchLogStore):
    """SQLite implementation of the search log sink."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.transaction() as conn:
                yield conn
        else:
            async with get_transaction() as conn:
                yield conn

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    async def save(self, log: SearchLog) -> SearchLog:
        """Persist a search log record."""
        async with self._transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO search_logs (
                    original_query, query_language, extracted_keywords, results,
                    search_time_ms, total_results, results_returned,
                    timestamp, date, hour
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log.original_query,
                    log.query_language.value,
                    json.dumps(log.extracted_keywords, ensure_ascii=False),
                    json.dumps(
                        [r.model_dump() for r in log.results],
                        ensure_ascii=False,
                    ),
                    log.performance.search_time_ms,
                    log.performance.total_results,
                    log.performance.results_returned,
                    log.timestamp.isoformat(),
                    log.date,
                    log.hour,
                ),
            )
            log.id = cursor.lastrowid

        logger.debug(
            "search_log_saved",
            log_id=log.id,
            results=log.performance.results_returned,
        )
        return log

    async def list_recent(self, limit: int = 50) -> list[SearchLog]:
        """List most recent search logs, newest first."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM search_logs ORDER BY timestamp DESC, id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
        return [self._row_to_entity(row) for row in rows]

    def _row_to_entity(self, row: aiosqlite.Row) -> SearchLog:
        return SearchLog(
            id=row["id"],
            original_query=row["original_query"],
            query_language=row["query_language"],
            extracted_keywords=json.loads(row["extracted_keywords"] or "[]"),
            results=[
                SearchResultLog(**item) for item in json.loads(row["results"] or "[]")
            ],
            performance=SearchPerformance(
                search_time_ms=row["search_time_ms"],
                total_results=row["total_results"],
                results_returned=row["results_returned"],
            ),
            timestamp=datetime.fromisoformat(row["timestamp"]),
        )


# Singleton instance
_log_store: SQLiteSearchLogStore | None = None


def get_search_log_store() -> SQLiteSearchLogStore:
    """Get or create search log store singleton."""
    global _log_store
    if _log_store is None:
        _log_store = SQLiteSearchLogStore()
    return _log_store
