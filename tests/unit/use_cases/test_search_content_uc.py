"""Unit tests for the search use cases."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from smartsearch.application.dto.requests import SmartSearchRequest
from smartsearch.application.use_cases import (
    ListSearchLogsUseCase,
    SearchContentUseCase,
    TopicAwareSearchUseCase,
)
from smartsearch.core.entities.search import Language, SearchResult, SimilarResult
from smartsearch.core.entities.search_log import SearchLog, SearchResultLog
from smartsearch.core.exceptions import UnsafeIdentifierError, ValidationError
from smartsearch.core.interfaces.storage import ISearchLogStore
from smartsearch.core.services import SearchService, TopicReranker

COLLECTIONS = ["actualities", "guides"]


def sample_result(rid: str = "1", score: float = 80.0) -> SearchResult:
    return SearchResult(
        original_id=rid,
        collection="guides",
        title="Guide des parents",
        description="Accompagner les enfants",
        url="https://www.e-himaya.gov.ma/parents/home",
        tag="GUIDES.PARENTS",
        score=score,
        matched_keywords=["parents"],
    )


@pytest.fixture
def search_service() -> MagicMock:
    service = MagicMock(spec=SearchService)
    service.execute = AsyncMock(return_value=[sample_result()])
    service.extract_keywords.return_value = ["parents"]
    service.collections = COLLECTIONS
    return service


class TestSearchContentUseCase:
    @pytest.mark.asyncio
    async def test_single_collection(self, search_service):
        use_case = SearchContentUseCase(search_service)

        outcome = await use_case.execute(SmartSearchRequest(query="les parents", collection="guides"))

        domain_request = search_service.execute.await_args.args[0]
        assert domain_request.collection == "guides"
        assert outcome.collections_searched == ["guides"]
        assert outcome.keywords == ["parents"]
        assert outcome.reranked is False

    @pytest.mark.asyncio
    async def test_force_fan_out(self, search_service):
        use_case = SearchContentUseCase(search_service)

        outcome = await use_case.execute(
            SmartSearchRequest(query="parents", collection="guides"),
            force_fan_out=True,
        )

        assert search_service.execute.await_args.args[0].collection is None
        assert outcome.collections_searched == COLLECTIONS

    @pytest.mark.asyncio
    async def test_aliases_and_language(self, search_service):
        request = SmartSearchRequest.model_validate(
            {"query": "2024", "tableName": "guides", "searchFields": ["name_ar"], "language": "Arabic"}
        )

        await SearchContentUseCase(search_service).execute(request)

        domain_request = search_service.execute.await_args.args[0]
        assert domain_request.collection == "guides"
        assert domain_request.fields == ["name_ar"]
        assert domain_request.language == Language.ARABIC

    @pytest.mark.asyncio
    async def test_unsupported_language(self, search_service):
        with pytest.raises(ValidationError):
            await SearchContentUseCase(search_service).execute(
                SmartSearchRequest(query="x", language="english")
            )
        search_service.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsafe_sort_field(self, search_service):
        with pytest.raises(UnsafeIdentifierError):
            await SearchContentUseCase(search_service).execute(
                SmartSearchRequest(query="x", sortField="title; --")
            )

    @pytest.mark.asyncio
    async def test_to_response(self, search_service):
        use_case = SearchContentUseCase(search_service)
        outcome = await use_case.execute(SmartSearchRequest(query="parents", collection="guides"))
        outcome.results[0].similar_results = [
            SimilarResult(original_id="2", collection="guides", title="Autre", similarity=0.9)
        ]

        response = use_case.to_response(outcome)

        assert response.count == 1
        assert response.results[0].tag == "GUIDES.PARENTS"
        assert response.results[0].similar_results[0].similarity == 0.9
        assert response.processing_time_ms >= 0


class TestTopicAwareSearchUseCase:
    @pytest.mark.asyncio
    async def test_reranks_when_model_trained(self, search_service):
        reranker = MagicMock(spec=TopicReranker)
        reranker.is_active = True
        reranked = [sample_result("1", 95.0)]
        reranker.rerank.return_value = reranked

        outcome = await TopicAwareSearchUseCase(search_service, reranker).execute(
            SmartSearchRequest(query="parents")
        )

        reranker.rerank.assert_called_once_with("parents", search_service.execute.return_value)
        assert outcome.results is reranked
        assert outcome.reranked is True
        assert outcome.collections_searched == COLLECTIONS

    @pytest.mark.asyncio
    async def test_falls_back_without_model(self, search_service):
        reranker = MagicMock(spec=TopicReranker)
        reranker.is_active = False

        outcome = await TopicAwareSearchUseCase(search_service, reranker).execute(
            SmartSearchRequest(query="parents", collection="guides")
        )

        reranker.rerank.assert_not_called()
        assert outcome.reranked is False
        assert [r.score for r in outcome.results] == [80.0]


class TestListSearchLogsUseCase:
    @pytest.mark.asyncio
    async def test_execute_and_response(self):
        store = AsyncMock(spec=ISearchLogStore)
        store.list_recent.return_value = [
            SearchLog(
                id=3,
                original_query="parents",
                extracted_keywords=["parents"],
                results=[
                    SearchResultLog(
                        document_id="1", collection="guides", title="Guide", score=80.0, position=1
                    )
                ],
                timestamp=datetime(2024, 6, 1, 9, 15),
            )
        ]
        use_case = ListSearchLogsUseCase(store)

        response = use_case.to_response(await use_case.execute(10))

        store.list_recent.assert_awaited_once_with(10)
        assert response.total == 1
        log = response.logs[0]
        assert log.query_language == "french"
        assert log.date == "2024-06-01"
        assert log.hour == 9
        assert log.results[0].position == 1
