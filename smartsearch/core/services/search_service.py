"""
Search service for keyword search across collections.

Runs single-collection searches or fans a query out to every configured
collection, merges the capped per-collection results and records an
analytics log in the background.
"""

import asyncio
import time
from dataclasses import dataclass, field

from smartsearch.config import get_logger, get_settings
from smartsearch.core.entities.search import Language, SearchRequest, SearchResult
from smartsearch.core.entities.search_log import (
    SearchLog,
    SearchPerformance,
    SearchResultLog,
)
from smartsearch.core.exceptions import InvalidQueryError
from smartsearch.core.interfaces.storage import ISearchLogStore, ISearchRepository
from smartsearch.core.services.field_resolver import FieldResolver, ensure_identifier
from smartsearch.core.services.keyword_extractor import KeywordExtractor
from smartsearch.core.services.language_detector import LanguageDetector
from smartsearch.core.services.scoring import ScoringEngine

logger = get_logger(__name__)


@dataclass
class CollectionOutcome:
    """Scored results of one collection plus its raw candidate count."""

    collection: str
    results: list[SearchResult] = field(default_factory=list)
    candidates: int = 0


def paginate(results: list[SearchResult], page: int, size: int) -> list[SearchResult]:
    """Slice results for a page; size 0 returns everything from the offset."""
    if size <= 0:
        return results
    start = page * size
    return results[start : start + size]


class SearchService:
    """
    Keyword search across one or many collections.

    All collaborators are injected; storage failures never escape a
    collection search.
    """

    def __init__(
        self,
        repository: ISearchRepository,
        log_store: ISearchLogStore | None = None,
        extractor: KeywordExtractor | None = None,
        detector: LanguageDetector | None = None,
        scoring: ScoringEngine | None = None,
        field_resolver: FieldResolver | None = None,
        collections: list[str] | None = None,
        per_collection_limit: int | None = None,
        analytics_enabled: bool | None = None,
    ):
        settings = get_settings().search

        self._repository = repository
        self._log_store = log_store
        self._extractor = extractor or KeywordExtractor()
        self._detector = detector or LanguageDetector()
        self._scoring = scoring or ScoringEngine(
            base_url=settings.site_base_url,
            description_max_length=settings.description_max_length,
        )
        self._field_resolver = field_resolver or FieldResolver(
            repository, settings.excluded_fields
        )
        self._collections = list(collections if collections is not None else settings.collections)
        self._per_collection_limit = (
            per_collection_limit
            if per_collection_limit is not None
            else settings.per_collection_limit
        )
        self._analytics_enabled = (
            analytics_enabled if analytics_enabled is not None else settings.analytics_enabled
        )

        # Keeps background log tasks alive until they finish
        self._pending_logs: set[asyncio.Task] = set()

    @property
    def collections(self) -> list[str]:
        return list(self._collections)

    def extract_keywords(self, query: str) -> list[str]:
        return self._extractor.extract_keywords(query)

    async def execute(self, request: SearchRequest) -> list[SearchResult]:
        """
        Run a search.

        Raises:
            InvalidQueryError: If the query is blank.
            UnsafeIdentifierError: If the target collection or a field is
                not a plain identifier (single-collection mode).
        """
        self.validate(request)

        if request.is_fan_out:
            return await self.search_all(request)

        keywords = self._extractor.extract_keywords(request.query)
        outcome = await self._search_collection(request, request.collection, keywords)

        logger.info(
            "collection_search_completed",
            collection=request.collection,
            keywords=keywords,
            candidates=outcome.candidates,
            results=len(outcome.results),
        )
        return paginate(outcome.results, request.page, request.size)

    async def search_all(self, request: SearchRequest) -> list[SearchResult]:
        """
        Fan a query out to every configured collection.

        Each collection yields at most per_collection_limit results; a
        failing collection is logged and skipped. The merged list is sorted
        by score and not paginated further.
        """
        self.validate(request)
        start_time = time.perf_counter()

        keywords = self._extractor.extract_keywords(request.query)
        per_collection = [
            request.model_copy(
                update={"collection": name, "page": 0, "size": self._per_collection_limit}
            )
            for name in self._collections
        ]

        outcomes = await asyncio.gather(
            *(self._search_isolated(sub, keywords) for sub in per_collection)
        )

        merged: list[SearchResult] = []
        total_candidates = 0
        for outcome in outcomes:
            merged.extend(outcome.results[: self._per_collection_limit])
            total_candidates += outcome.candidates

        merged.sort(key=lambda r: r.score or 0.0, reverse=True)

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "fan_out_search_completed",
            collections=len(self._collections),
            keywords=keywords,
            candidates=total_candidates,
            results=len(merged),
            elapsed_ms=elapsed_ms,
        )

        self._schedule_log(request, keywords, merged, total_candidates, elapsed_ms)
        return merged

    def validate(self, request: SearchRequest) -> None:
        if request.query is None or not request.query.strip():
            raise InvalidQueryError(request.query)

    def resolve_language(self, request: SearchRequest) -> Language:
        """Query script decides; the request preference covers script-less queries."""
        if self._detector.has_script(request.query):
            return self._detector.detect_language(request.query)
        return request.language

    async def _search_isolated(
        self, request: SearchRequest, keywords: list[str]
    ) -> CollectionOutcome:
        try:
            return await self._search_collection(request, request.collection, keywords)
        except Exception as e:
            logger.warning(
                "collection_search_failed",
                collection=request.collection,
                error=str(e),
            )
            return CollectionOutcome(collection=request.collection or "")

    async def _search_collection(
        self,
        request: SearchRequest,
        collection: str,
        keywords: list[str],
    ) -> CollectionOutcome:
        ensure_identifier("collection", collection)
        if request.fields:
            for name in request.fields:
                ensure_identifier("field", name)

        if not keywords:
            return CollectionOutcome(collection=collection)

        fields = await self._field_resolver.resolve(collection, request.fields)
        if not fields:
            return CollectionOutcome(collection=collection)

        rows = await self._repository.find_matching(collection, fields, keywords)
        results = self._scoring.score_and_sort(
            rows,
            keywords,
            fields,
            collection,
            language=self.resolve_language(request),
            highlight=request.highlight_matches,
        )
        return CollectionOutcome(
            collection=collection,
            results=results,
            candidates=len(rows),
        )

    def _schedule_log(
        self,
        request: SearchRequest,
        keywords: list[str],
        results: list[SearchResult],
        total_candidates: int,
        elapsed_ms: int,
    ) -> None:
        if self._log_store is None or not self._analytics_enabled:
            return

        try:
            log = SearchLog(
                original_query=request.query,
                query_language=self.resolve_language(request),
                extracted_keywords=keywords,
                results=[
                    SearchResultLog(
                        document_id=result.original_id,
                        collection=result.collection,
                        title=result.title,
                        score=result.score,
                        matched_keywords=result.matched_keywords,
                        position=position,
                    )
                    for position, result in enumerate(results, start=1)
                ],
                performance=SearchPerformance(
                    search_time_ms=elapsed_ms,
                    total_results=total_candidates,
                    results_returned=len(results),
                ),
            )
            task = asyncio.create_task(self._save_log(log))
        except Exception as e:
            logger.warning("search_log_failed", error=str(e))
            return

        self._pending_logs.add(task)
        task.add_done_callback(self._pending_logs.discard)

    async def _save_log(self, log: SearchLog) -> None:
        try:
            await self._log_store.save(log)
        except Exception as e:
            logger.warning("search_log_failed", query=log.original_query, error=str(e))

    async def wait_for_pending_logs(self) -> None:
        """Wait for in-flight analytics writes (shutdown and tests)."""
        if self._pending_logs:
            await asyncio.gather(*list(self._pending_logs), return_exceptions=True)
