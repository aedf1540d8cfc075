"""
Schema migrations for the search database.

Each vNNN_name.sql file runs once, in one transaction together with its
schema_migrations row, so a failing file leaves neither tables nor a record
behind. Pending files are applied at application startup and by the
smartsearch-migrate command.
"""

import argparse
import asyncio
import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from smartsearch.config import get_logger, get_settings
from smartsearch.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"^v(\d{3})_([a-z0-9_]+)\.sql$")

SCHEMA_MIGRATIONS_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


@dataclass(frozen=True)
class Migration:
    """One versioned SQL file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "Migration":
        match = FILENAME_PATTERN.match(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)

    def script(self) -> str:
        """The file's SQL and its bookkeeping row wrapped in one transaction."""
        # version, name and checksum are limited to [a-z0-9_] by the filename pattern
        return (
            "BEGIN;\n"
            f"{self.path.read_text(encoding='utf-8')}\n;\n"
            "INSERT INTO schema_migrations (version, name, checksum) "
            f"VALUES ('{self.version}', '{self.name}', '{self.checksum}');\n"
            "COMMIT;\n"
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    duration_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration files of a directory in version order; other files are ignored."""
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(Migration.load(path))
        except ValueError:
            logger.warning("migration_file_ignored", path=str(path))
    return migrations


async def applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {row[0]: row[1] for row in await cursor.fetchall()}


def select_pending(migrations: list[Migration], applied: dict[str, str]) -> list[Migration]:
    """Migrations not yet recorded. Edited files that were already applied are only reported."""
    for migration in migrations:
        recorded = applied.get(migration.version)
        if recorded is not None and recorded != migration.checksum:
            logger.warning(
                "migration_changed_after_apply",
                version=migration.version,
                name=migration.name,
            )
    return [m for m in migrations if m.version not in applied]


async def apply_migration(conn: aiosqlite.Connection, migration: Migration) -> MigrationResult:
    start = time.perf_counter()
    try:
        await conn.executescript(migration.script())
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, name=migration.name, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            duration_ms=int((time.perf_counter() - start) * 1000),
            error=str(e),
        )

    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info("migration_applied", version=migration.version, name=migration.name, duration_ms=duration_ms)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        duration_ms=duration_ms,
    )


async def run_migrations(
    db_path: Path | None = None,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[MigrationResult]:
    """Apply pending migrations in order, stopping at the first failure."""
    db_path = Path(db_path or get_settings().storage.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = discover_migrations(migrations_dir)

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path, isolation_level=None) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(SCHEMA_MIGRATIONS_DDL)

        for migration in select_pending(migrations, await applied_checksums(conn)):
            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

    if results:
        logger.info(
            "migrations_finished",
            db_path=str(db_path),
            applied=sum(r.success for r in results),
            failed=sum(not r.success for r in results),
        )
    return results


async def list_pending(
    db_path: Path | None = None,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[Migration]:
    """Pending migrations without touching the database; a missing file has all of them pending."""
    db_path = Path(db_path or get_settings().storage.db_path)
    migrations = discover_migrations(migrations_dir)
    if not db_path.exists():
        return migrations

    async with aiosqlite.connect(db_path) as conn:
        try:
            applied = await applied_checksums(conn)
        except aiosqlite.OperationalError:
            return migrations
    return select_pending(migrations, applied)


async def ensure_schema(
    db_path: Path | None = None,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> None:
    """Startup hook: apply pending migrations or raise DatabaseError."""
    failed = [r for r in await run_migrations(db_path, migrations_dir) if not r.success]
    if failed:
        raise DatabaseError(f"migration v{failed[0].version}", failed[0].error or "unknown error")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="smartsearch-migrate",
        description="Apply pending search database migrations",
    )
    parser.add_argument("--db-path", type=Path, help="Database file (default: STORAGE_ settings)")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    args = parser.parse_args(argv)

    if args.dry_run:
        pending = asyncio.run(list_pending(args.db_path))
        for migration in pending:
            print(f"pending v{migration.version} {migration.name}")
        if not pending:
            print("up to date")
        return 0

    results = asyncio.run(run_migrations(args.db_path))
    for result in results:
        state = "applied" if result.success else "FAILED"
        print(f"{state} v{result.version} {result.name} ({result.duration_ms}ms)")
        if result.error:
            print(f"  {result.error}")
    if not results:
        print("up to date")
    return 0 if all(r.success for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
