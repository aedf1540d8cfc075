"""Database migrations module."""

from smartsearch.infrastructure.storage.sqlite.migrations.migrator import (
    Migration,
    MigrationResult,
    discover_migrations,
    ensure_schema,
    list_pending,
    run_migrations,
)

__all__ = [
    "Migration",
    "MigrationResult",
    "discover_migrations",
    "ensure_schema",
    "list_pending",
    "run_migrations",
]
