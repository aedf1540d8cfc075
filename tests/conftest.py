"""Pytest configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from smartsearch.config import reset_settings
from smartsearch.core.entities.search import Language, SearchRequest
from smartsearch.core.interfaces.storage import ISearchRepository


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point storage at a temp directory and use the in-memory admission store."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ADMISSION_BACKEND", "memory")
    monkeypatch.setenv("ENVIRONMENT", "development")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_repository() -> AsyncMock:
    """Search repository port with no matches."""
    repo = AsyncMock(spec=ISearchRepository)
    repo.get_text_fields.return_value = []
    repo.find_matching.return_value = []
    repo.fetch_documents.return_value = []
    return repo


@pytest.fixture
def make_request():
    """Build a domain search request."""

    def _make(query: str = "protection enfants", **kwargs: Any) -> SearchRequest:
        kwargs.setdefault("language", Language.FRENCH)
        return SearchRequest(query=query, **kwargs)

    return _make


@pytest.fixture
def actuality_row() -> dict:
    """Sample actualities row."""
    return {
        "id": 1,
        "slug": "protection-enfants-en-ligne",
        "title_fr": "Protection des enfants en ligne",
        "title_ar": "حماية الأطفال على الإنترنت",
        "summary_fr": "Conseils pour la protection des enfants sur internet.",
        "summary_ar": "نصائح لحماية الأطفال على الإنترنت",
        "image_name": "protection.png",
        "status": "published",
    }


@pytest.fixture
def guide_row() -> dict:
    """Sample guides row with a parents profile."""
    return {
        "id": 7,
        "slug": "guide-parents",
        "name_fr": "Guide des parents",
        "description_fr": "Un guide pour accompagner les enfants en ligne.",
        "profile": "parent",
    }
