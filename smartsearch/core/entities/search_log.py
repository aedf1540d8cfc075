"""
Search analytics entities.

One SearchLog is written per fan-out search.
"""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from smartsearch.core.entities.search import Language


class SearchResultLog(BaseModel):
    """Snapshot of one returned result."""

    document_id: str
    collection: str
    title: str
    score: float | None = None
    matched_keywords: list[str] = Field(default_factory=list)
    position: int  # 1-based rank


class SearchPerformance(BaseModel):
    """Timing and volume metrics for one search."""

    search_time_ms: int = 0
    total_results: int = 0  # candidate rows across collections
    results_returned: int = 0


class SearchLog(BaseModel):
    """Analytics record for a search call."""

    id: int | None = None

    original_query: str
    query_language: Language = Language.FRENCH
    extracted_keywords: list[str] = Field(default_factory=list)
    results: list[SearchResultLog] = Field(default_factory=list)
    performance: SearchPerformance = Field(default_factory=SearchPerformance)

    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hour(self) -> int:
        return self.timestamp.hour
