"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from smartsearch.application.dto.requests import SmartSearchRequest
from smartsearch.application.dto.responses import (
    ClearModelResponse,
    ErrorResponse,
    HealthResponse,
    ModelStatusResponse,
    SearchLogListResponse,
    SearchResponse,
    SearchResultResponse,
    TrainModelResponse,
)
from smartsearch.application.services import (
    get_admission_controller,
    get_search_service,
    get_topic_reranker,
    get_training_service,
    reset_services,
)
from smartsearch.application.use_cases import (
    ListSearchLogsUseCase,
    SearchContentUseCase,
    TopicAwareSearchUseCase,
    TrainTopicModelUseCase,
)

__all__ = [
    # Request DTOs
    "SmartSearchRequest",
    # Response DTOs
    "SearchResponse",
    "SearchResultResponse",
    "SearchLogListResponse",
    "TrainModelResponse",
    "ModelStatusResponse",
    "ClearModelResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "SearchContentUseCase",
    "ListSearchLogsUseCase",
    "TopicAwareSearchUseCase",
    "TrainTopicModelUseCase",
    # Service factories
    "get_search_service",
    "get_topic_reranker",
    "get_training_service",
    "get_admission_controller",
    "reset_services",
]
