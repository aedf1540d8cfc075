"""Storage infrastructure implementations."""

from smartsearch.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteSearchLogStore,
    close_pool,
    get_connection,
    get_pool,
    get_search_log_store,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteSearchLogStore",
    "get_search_log_store",
    # Connection pool
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
