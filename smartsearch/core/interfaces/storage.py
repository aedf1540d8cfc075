"""
Abstract interfaces for storage providers.

Defines contracts for collection search and the analytics log sink.
"""

from abc import ABC, abstractmethod
from typing import Any

from smartsearch.core.entities.search_log import SearchLog


class ISearchRepository(ABC):
    """
    Abstract interface for searching stored collections.

    Collections are named tables of domain records; fields are their columns.
    """

    @abstractmethod
    async def get_text_fields(self, collection: str) -> list[str]:
        """List text-typed fields of a collection, ordered by name."""
        pass

    @abstractmethod
    async def find_matching(
        self,
        collection: str,
        fields: list[str],
        keywords: list[str],
    ) -> list[dict[str, Any]]:
        """
        Return rows where any field contains any keyword.

        Must return an empty list without touching storage when either
        fields or keywords is empty, and on storage failure.
        """
        pass

    @abstractmethod
    async def fetch_documents(
        self,
        collection: str,
        limit: int = 10000,
    ) -> list[dict[str, Any]]:
        """Return raw rows of a collection (training corpora)."""
        pass


class ISearchLogStore(ABC):
    """Abstract interface for the search analytics sink."""

    @abstractmethod
    async def save(self, log: SearchLog) -> SearchLog:
        """Persist a search log record."""
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> list[SearchLog]:
        """List most recent search logs, newest first."""
        pass
