"""
Topic-Aware Search Use Case.

Keyword search followed by topic re-ranking. Falls back to plain keyword
ranking while no topic model is trained.
"""

import time

from smartsearch.application.dto.requests import SmartSearchRequest
from smartsearch.application.dto.responses import SearchResponse
from smartsearch.application.services import get_search_service, get_topic_reranker
from smartsearch.application.use_cases.search_content import (
    SearchOutcomeDTO,
    outcome_to_response,
)
from smartsearch.config import get_logger
from smartsearch.core.services import SearchService, TopicReranker

logger = get_logger(__name__)


class TopicAwareSearchUseCase:
    """Use case for the chatbot endpoint."""

    def __init__(
        self,
        search_service: SearchService | None = None,
        reranker: TopicReranker | None = None,
    ):
        self._search = search_service
        self._reranker = reranker

    def _get_search(self) -> SearchService:
        if self._search is None:
            self._search = get_search_service()
        return self._search

    def _get_reranker(self) -> TopicReranker:
        if self._reranker is None:
            self._reranker = get_topic_reranker()
        return self._reranker

    async def execute(self, request: SmartSearchRequest) -> SearchOutcomeDTO:
        domain_request = request.to_domain()
        search = self._get_search()
        reranker = self._get_reranker()

        start = time.time()
        results = await search.execute(domain_request)

        reranked = reranker.is_active
        if reranked:
            results = reranker.rerank(request.query, results)
        else:
            logger.debug("topic_rerank_skipped", reason="model_not_trained")

        took_ms = (time.time() - start) * 1000
        logger.info(
            "topic_aware_search_complete",
            query=request.query[:50],
            results=len(results),
            reranked=reranked,
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
            reranked=reranked,
        )

    def to_response(self, outcome: SearchOutcomeDTO) -> SearchResponse:
        return outcome_to_response(outcome)
