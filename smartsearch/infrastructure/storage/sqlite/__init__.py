"""SQLite storage implementations."""

from smartsearch.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from smartsearch.infrastructure.storage.sqlite.search_log_store import (
    SQLiteSearchLogStore,
    get_search_log_store,
)

__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Stores
    "SQLiteSearchLogStore",
    "get_search_log_store",
]
