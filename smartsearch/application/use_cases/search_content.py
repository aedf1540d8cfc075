"""
Search Content Use Case.

Runs keyword search for one collection or across all collections and
reads back recent analytics logs.
"""

import time
from dataclasses import dataclass

from smartsearch.application.dto.requests import SmartSearchRequest
from smartsearch.application.dto.responses import (
    SearchLogListResponse,
    SearchLogResponse,
    SearchResponse,
    SearchResultLogResponse,
    SearchResultResponse,
    SimilarResultResponse,
)
from smartsearch.application.services import get_search_log_store, get_search_service
from smartsearch.config import get_logger
from smartsearch.core.entities.search import SearchResult
from smartsearch.core.entities.search_log import SearchLog
from smartsearch.core.interfaces.storage import ISearchLogStore
from smartsearch.core.services import SearchService

logger = get_logger(__name__)


@dataclass
class SearchOutcomeDTO:
    """Search outcome data transfer object."""

    query: str
    keywords: list[str]
    results: list[SearchResult]
    collections_searched: list[str]
    took_ms: float
    reranked: bool = False


def result_to_response(result: SearchResult) -> SearchResultResponse:
    """Convert a domain result to its API shape."""
    return SearchResultResponse(
        original_id=result.original_id,
        collection=result.collection,
        title=result.title,
        description=result.description,
        url=result.url,
        tag=result.tag.upper() if result.tag else None,
        image_name=result.image_name,
        score=result.score,
        matched_keywords=result.matched_keywords,
        highlighted_text=result.highlighted_text,
        topic_distribution=result.topic_distribution,
        dominant_topic=result.dominant_topic,
        similar_results=[
            SimilarResultResponse(
                original_id=s.original_id,
                collection=s.collection,
                title=s.title,
                similarity=s.similarity,
            )
            for s in result.similar_results
        ],
    )


def outcome_to_response(outcome: SearchOutcomeDTO) -> SearchResponse:
    return SearchResponse(
        query=outcome.query,
        keywords=outcome.keywords,
        results=[result_to_response(r) for r in outcome.results],
        count=len(outcome.results),
        collections_searched=outcome.collections_searched,
        processing_time_ms=round(outcome.took_ms, 2),
        reranked=outcome.reranked,
    )


class SearchContentUseCase:
    """
    Use case for keyword search.

    A request without a collection, or a forced fan-out, searches every
    configured collection.
    """

    def __init__(self, search_service: SearchService | None = None):
        self._search = search_service

    def _get_search(self) -> SearchService:
        if self._search is None:
            self._search = get_search_service()
        return self._search

    async def execute(
        self,
        request: SmartSearchRequest,
        force_fan_out: bool = False,
    ) -> SearchOutcomeDTO:
        """
        Execute search use case.

        Args:
            request: Search request parameters
            force_fan_out: Ignore the collection and search all collections

        Returns:
            SearchOutcomeDTO with results and timing
        """
        domain_request = request.to_domain(force_fan_out=force_fan_out)
        search = self._get_search()

        logger.info(
            "search_started",
            query=request.query[:50],
            collection=domain_request.collection,
        )

        start = time.time()
        results = await search.execute(domain_request)
        took_ms = (time.time() - start) * 1000

        logger.info(
            "search_complete",
            query=request.query[:50],
            results=len(results),
            took_ms=took_ms,
        )

        return SearchOutcomeDTO(
            query=request.query,
            keywords=search.extract_keywords(request.query),
            results=results,
            collections_searched=(
                search.collections
                if domain_request.is_fan_out
                else [domain_request.collection]
            ),
            took_ms=took_ms,
        )

    def to_response(self, outcome: SearchOutcomeDTO) -> SearchResponse:
        """Convert to API response format."""
        return outcome_to_response(outcome)


class ListSearchLogsUseCase:
    """Read recent analytics logs."""

    def __init__(self, log_store: ISearchLogStore | None = None):
        self._store = log_store

    def _get_store(self) -> ISearchLogStore:
        if self._store is None:
            self._store = get_search_log_store()
        return self._store

    async def execute(self, limit: int = 50) -> list[SearchLog]:
        return await self._get_store().list_recent(limit)

    def to_response(self, logs: list[SearchLog]) -> SearchLogListResponse:
        return SearchLogListResponse(
            logs=[
                SearchLogResponse(
                    id=log.id,
                    original_query=log.original_query,
                    query_language=log.query_language.value,
                    extracted_keywords=log.extracted_keywords,
                    results=[
                        SearchResultLogResponse(**r.model_dump()) for r in log.results
                    ],
                    search_time_ms=log.performance.search_time_ms,
                    total_results=log.performance.total_results,
                    results_returned=log.performance.results_returned,
                    timestamp=log.timestamp,
                    date=log.date,
                    hour=log.hour,
                )
                for log in logs
            ],
            total=len(logs),
        )
