"""
SQLite-backed collection search.

Implements the search repository port over plain SQLite tables: schema
introspection, keyword matching and raw row fetches.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiosqlite

from smartsearch.config import get_logger
from smartsearch.core.interfaces.storage import ISearchRepository
from smartsearch.infrastructure.search.query_builder import (
    build_match_query,
    is_text_type,
    quote_identifier,
)
from smartsearch.infrastructure.storage.sqlite.connection import ConnectionPool, get_connection

logger = get_logger(__name__)


class SQLiteSearchRepository(ISearchRepository):
    """
    Keyword search over SQLite collections.

    Storage errors are logged and turned into empty results. Unsafe
    identifiers raise UnsafeIdentifierError before any SQL runs.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    async def get_text_fields(self, collection: str) -> list[str]:
        table = quote_identifier("collection", collection)
        try:
            async with self._connection() as conn:
                cursor = await conn.execute(f"PRAGMA table_info({table})")
                rows = await cursor.fetchall()
        except Exception as e:
            logger.warning("schema_introspection_failed", collection=collection, error=str(e))
            return []

        return sorted(row["name"] for row in rows if is_text_type(row["type"]))

    async def find_matching(
        self,
        collection: str,
        fields: list[str],
        keywords: list[str],
    ) -> list[dict[str, Any]]:
        if not fields or not keywords:
            return []

        sql, params = build_match_query(collection, fields, keywords)
        try:
            async with self._connection() as conn:
                cursor = await conn.execute(sql, params)
                rows = await cursor.fetchall()
        except Exception as e:
            logger.warning(
                "collection_query_failed",
                collection=collection,
                fields=len(fields),
                keywords=len(keywords),
                error=str(e),
            )
            return []

        return [dict(row) for row in rows]

    async def fetch_documents(
        self,
        collection: str,
        limit: int = 10000,
    ) -> list[dict[str, Any]]:
        table = quote_identifier("collection", collection)
        try:
            async with self._connection() as conn:
                cursor = await conn.execute(f"SELECT * FROM {table} LIMIT ?", (limit,))
                rows = await cursor.fetchall()
        except Exception as e:
            logger.warning("collection_fetch_failed", collection=collection, error=str(e))
            return []

        return [dict(row) for row in rows]


# Singleton instance
_repository: SQLiteSearchRepository | None = None


def get_search_repository() -> SQLiteSearchRepository:
    """Get or create search repository singleton."""
    global _repository
    if _repository is None:
        _repository = SQLiteSearchRepository()
    return _repository
