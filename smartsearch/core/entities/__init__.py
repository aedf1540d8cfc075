"""Core domain entities."""

from smartsearch.core.entities.admission import AdmissionDecision, AdmissionOutcome
from smartsearch.core.entities.search import (
    Language,
    SearchRequest,
    SearchResult,
    SimilarResult,
)
from smartsearch.core.entities.search_log import (
    SearchLog,
    SearchPerformance,
    SearchResultLog,
)
from smartsearch.core.entities.topic import (
    TopicInfo,
    TopicModelInfo,
    TrainingState,
    TrainingStatus,
)

__all__ = [
    # Search entities
    "Language",
    "SearchRequest",
    "SearchResult",
    "SimilarResult",
    # Analytics entities
    "SearchLog",
    "SearchResultLog",
    "SearchPerformance",
    # Topic entities
    "TopicInfo",
    "TopicModelInfo",
    "TrainingState",
    "TrainingStatus",
    # Admission entities
    "AdmissionDecision",
    "AdmissionOutcome",
]
