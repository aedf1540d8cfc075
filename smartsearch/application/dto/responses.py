"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SimilarResultResponse(BaseModel):
    """Related result close in topic space."""

    original_id: str = Field(..., description="Source record ID")
    collection: str = Field(..., description="Source collection")
    title: str = Field(..., description="Result title")
    similarity: float = Field(..., description="Topic cosine similarity")


class SearchResultResponse(BaseModel):
    """Single search result with score and presentation fields."""

    original_id: str = Field(..., description="Source record ID")
    collection: str = Field(..., description="Source collection")
    title: str = Field(..., description="Language-resolved title")
    description: str = Field(..., description="Language-resolved description")
    url: str | None = Field(default=None, description="Canonical URL")
    tag: str | None = Field(default=None, description="Category tag")
    image_name: str | None = Field(default=None, description="Image reference")
    score: float | None = Field(default=None, description="Relevance score")
    matched_keywords: list[str] = Field(default=[], description="Keywords found in the record")
    highlighted_text: str | None = Field(default=None, description="Description with <mark> tags")
    topic_distribution: list[float] | None = Field(default=None, description="Topic vector")
    dominant_topic: int | None = Field(default=None, description="Most probable topic")
    similar_results: list[SimilarResultResponse] = Field(default=[], description="Related results")


class SearchResponse(BaseModel):
    """Search response with results and timing."""

    query: str = Field(..., description="Original search query")
    keywords: list[str] = Field(default=[], description="Extracted keywords")
    results: list[SearchResultResponse] = Field(default=[], description="Ranked results")
    count: int = Field(..., ge=0, description="Number of results returned")
    collections_searched: list[str] = Field(default=[], description="Collections queried")
    processing_time_ms: float = Field(..., ge=0, description="Search duration in milliseconds")
    reranked: bool = Field(default=False, description="Whether topic re-ranking was applied")


class SearchResultLogResponse(BaseModel):
    """Result snapshot inside a search log."""

    document_id: str
    collection: str
    title: str
    score: float | None = None
    matched_keywords: list[str] = []
    position: int


class SearchLogResponse(BaseModel):
    """Analytics record of one search."""

    id: int | None = None
    original_query: str
    query_language: str
    extracted_keywords: list[str] = []
    results: list[SearchResultLogResponse] = []
    search_time_ms: int = 0
    total_results: int = 0
    results_returned: int = 0
    timestamp: datetime
    date: str
    hour: int


class SearchLogListResponse(BaseModel):
    """Recent search logs."""

    logs: list[SearchLogResponse] = Field(default=[])
    total: int = Field(..., ge=0)


class TrainingStatusResponse(BaseModel):
    """State of the latest training run."""

    state: str = Field(..., description="idle, running, completed or failed")
    collections: list[str] = []
    num_documents: int = 0
    started_at: datetime | None = None
    finished_at: datetime | None = None
    error: str | None = None


class TrainModelResponse(BaseModel):
    """Training request acknowledgement."""

    status: str = Field(..., description="started or already_running")
    collections: list[str] = Field(default=[], description="Collections used as corpus")
    message: str
    processing_time_ms: float = Field(..., ge=0)


class ModelStatusResponse(BaseModel):
    """Topic model metadata and discovered topics."""

    trained: bool
    num_documents: int = 0
    num_topics: int = 0
    vocabulary_size: int = 0
    topics: dict[int, list[str]] = Field(default={}, description="Top words per topic")
    generation: int = 0
    trained_at: datetime | None = None
    training: TrainingStatusResponse | None = None


class ClearModelResponse(BaseModel):
    """Model clear acknowledgement."""

    status: str = "cleared"
    message: str = "Model cleared successfully"


class ComponentHealthResponse(BaseModel):
    """Health status of one dependency."""

    name: str
    healthy: bool
    latency_ms: float | None = None
    error: str | None = None
    details: dict = {}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None
    admission_store: ComponentHealthResponse | None = None
    topic_model_trained: bool = False


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVALID_QUERY)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
