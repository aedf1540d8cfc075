"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path

import pytest

from smartsearch.core.entities.search import Language
from smartsearch.core.entities.search_log import SearchLog, SearchPerformance, SearchResultLog
from smartsearch.infrastructure.storage.sqlite.connection import ConnectionPool
from smartsearch.infrastructure.storage.sqlite.migrations.migrator import run_migrations


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database with all migrations applied."""
    await run_migrations(temp_db_path)
    return temp_db_path


@pytest.fixture
async def pool(initialized_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Small connection pool over the migrated database."""
    pool = ConnectionPool(initialized_db, pool_size=2)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def sample_log() -> SearchLog:
    """Search log with two result snapshots."""
    return SearchLog(
        original_query="Sécurité des enfants",
        query_language=Language.FRENCH,
        extracted_keywords=["sécurité", "enfants"],
        results=[
            SearchResultLog(
                document_id="1",
                collection="actualities",
                title="Sécurité en ligne",
                score=100.0,
                matched_keywords=["sécurité"],
                position=1,
            ),
            SearchResultLog(
                document_id="4",
                collection="guides",
                title="Guide des parents",
                score=42.5,
                matched_keywords=["enfants"],
                position=2,
            ),
        ],
        performance=SearchPerformance(search_time_ms=12, total_results=9, results_returned=2),
        timestamp=datetime(2024, 3, 5, 14, 30, 0),
    )
