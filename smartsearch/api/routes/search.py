"""
Search endpoints.
"""

from fastapi import APIRouter, Depends, Query

from smartsearch.api.dependencies import (
    get_search_content_use_case,
    get_search_logs_use_case,
    get_topic_aware_search_use_case,
)
from smartsearch.application.dto.requests import SmartSearchRequest
from smartsearch.application.dto.responses import SearchLogListResponse, SearchResponse
from smartsearch.application.use_cases import (
    ListSearchLogsUseCase,
    SearchContentUseCase,
    TopicAwareSearchUseCase,
)

router = APIRouter(prefix="/api", tags=["search"])


@router.post(
    "/smart-search",
    response_model=SearchResponse,
)
async def smart_search(
    request: SmartSearchRequest,
    use_case: SearchContentUseCase = Depends(get_search_content_use_case),
) -> SearchResponse:
    """
    Keyword search.

    Searches the given collection, or every collection when none is given.
    """
    outcome = await use_case.execute(request)
    return use_case.to_response(outcome)


@router.post(
    "/smart-search/all-collections",
    response_model=SearchResponse,
)
async def smart_search_all(
    request: SmartSearchRequest,
    use_case: SearchContentUseCase = Depends(get_search_content_use_case),
) -> SearchResponse:
    """Search every collection; at most three results per collection."""
    outcome = await use_case.execute(request, force_fan_out=True)
    return use_case.to_response(outcome)


@router.get(
    "/smart-search/logs",
    response_model=SearchLogListResponse,
)
async def list_search_logs(
    limit: int = Query(default=50, ge=1, le=500),
    use_case: ListSearchLogsUseCase = Depends(get_search_logs_use_case),
) -> SearchLogListResponse:
    """Most recent analytics records first."""
    logs = await use_case.execute(limit)
    return use_case.to_response(logs)


@router.post(
    "/chatbot",
    response_model=SearchResponse,
)
async def chatbot_search(
    request: SmartSearchRequest,
    use_case: TopicAwareSearchUseCase = Depends(get_topic_aware_search_use_case),
) -> SearchResponse:
    """
    Topic-aware search.

    Keyword results re-ranked by topic similarity to the query once a
    topic model has been trained.
    """
    outcome = await use_case.execute(request)
    return use_case.to_response(outcome)
