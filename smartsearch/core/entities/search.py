"""
Search domain entities.

Represents search requests, scored results and topic enrichment.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    """Supported content languages."""

    FRENCH = "french"
    ARABIC = "arabic"

    @property
    def suffix(self) -> str:
        """Column suffix used by language-tagged fields."""
        return "ar" if self is Language.ARABIC else "fr"


class SearchRequest(BaseModel):
    """
    Immutable search request.

    A request without a collection runs in fan-out mode. Per-collection
    overrides are derived with model_copy(update=...) rather than mutating
    the caller's request.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    collection: str | None = None
    fields: list[str] | None = None
    language: Language = Language.FRENCH

    # Pagination (size 0 means unbounded)
    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=0)

    # Accepted for compatibility; ranking is always by score
    sort_field: str | None = None
    sort_ascending: bool = False

    highlight_matches: bool = False

    # Reserved for vector search
    use_semantic_search: bool = False
    query_vector: list[float] | None = None

    @property
    def is_fan_out(self) -> bool:
        return not self.collection


class SimilarResult(BaseModel):
    """Reference to another result close in topic space."""

    original_id: str
    collection: str
    title: str
    similarity: float


class SearchResult(BaseModel):
    """
    Scored search result built from one candidate row.

    Either fully scored or not built at all. Re-ranking only updates
    score and the topic fields.
    """

    original_id: str
    collection: str
    data: dict[str, Any] = Field(default_factory=dict)

    score: float | None = None
    matched_keywords: list[str] = Field(default_factory=list)

    # Language-resolved presentation
    title: str
    description: str
    url: str | None = None
    image_name: str | None = None
    tag: str | None = None
    highlighted_text: str | None = None

    # Topic enrichment
    topic_distribution: list[float] | None = None
    dominant_topic: int | None = None
    similar_results: list[SimilarResult] = Field(default_factory=list)
