"""Data transfer objects for the API contract."""

from smartsearch.application.dto.requests import SUPPORTED_LANGUAGES, SmartSearchRequest
from smartsearch.application.dto.responses import (
    ClearModelResponse,
    ComponentHealthResponse,
    ErrorResponse,
    HealthResponse,
    ModelStatusResponse,
    SearchLogListResponse,
    SearchLogResponse,
    SearchResponse,
    SearchResultLogResponse,
    SearchResultResponse,
    SimilarResultResponse,
    TrainingStatusResponse,
    TrainModelResponse,
)

__all__ = [
    # Requests
    "SmartSearchRequest",
    "SUPPORTED_LANGUAGES",
    # Responses
    "SearchResponse",
    "SearchResultResponse",
    "SimilarResultResponse",
    "SearchLogResponse",
    "SearchLogListResponse",
    "SearchResultLogResponse",
    "TrainModelResponse",
    "TrainingStatusResponse",
    "ModelStatusResponse",
    "ClearModelResponse",
    "HealthResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
]
