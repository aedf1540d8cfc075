"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from smartsearch.config import get_settings
from smartsearch.core.services import (
    AdmissionController,
    SearchService,
    TopicReranker,
    TopicTrainingService,
)

if TYPE_CHECKING:
    from smartsearch.core.interfaces import (
        IAdmissionStore,
        ISearchLogStore,
        ISearchRepository,
        ITopicModel,
    )


# Singleton service instances
_search_service: SearchService | None = None
_topic_reranker: TopicReranker | None = None
_training_service: TopicTrainingService | None = None
_admission_controller: AdmissionController | None = None


def get_search_log_store() -> "ISearchLogStore":
    """Get the analytics log store."""
    from smartsearch.infrastructure.storage.sqlite import get_search_log_store as _get_store

    return _get_store()


def get_search_service(
    repository: "ISearchRepository | None" = None,
    log_store: "ISearchLogStore | None" = None,
) -> SearchService:
    """
    Get or create SearchService instance.

    Creates infrastructure dependencies if not provided.
    Uses singleton pattern for efficiency.

    Args:
        repository: Optional collection repository override
        log_store: Optional analytics log store override

    Returns:
        Configured SearchService
    """
    global _search_service

    if _search_service is not None and repository is None:
        return _search_service

    # Lazy import infrastructure to avoid circular imports
    from smartsearch.infrastructure.search import get_search_repository

    service = SearchService(
        repository=repository or get_search_repository(),
        log_store=log_store or get_search_log_store(),
    )

    if repository is None:
        _search_service = service

    return service


def get_topic_reranker(model: "ITopicModel | None" = None) -> TopicReranker:
    """
    Get or create TopicReranker instance.

    The reranker owns the topic vector cache, so one instance is shared.
    """
    global _topic_reranker

    if _topic_reranker is not None and model is None:
        return _topic_reranker

    from smartsearch.infrastructure.topics import get_topic_model

    settings = get_settings().topic
    reranker = TopicReranker(
        model=model or get_topic_model(),
        similar_results=settings.similar_results,
        min_similarity=settings.min_similarity,
    )

    if model is None:
        _topic_reranker = reranker

    return reranker


def get_training_service(
    repository: "ISearchRepository | None" = None,
    model: "ITopicModel | None" = None,
) -> TopicTrainingService:
    """Get or create TopicTrainingService instance."""
    global _training_service

    if _training_service is not None and repository is None and model is None:
        return _training_service

    from smartsearch.infrastructure.search import get_search_repository
    from smartsearch.infrastructure.topics import get_topic_model

    settings = get_settings()
    service = TopicTrainingService(
        repository=repository or get_search_repository(),
        model=model or get_topic_model(),
        default_collections=settings.topic.training_collections,
        excluded_fields=settings.search.excluded_fields,
        training_limit=settings.topic.training_limit,
    )

    if repository is None and model is None:
        _training_service = service

    return service


def get_admission_controller(store: "IAdmissionStore | None" = None) -> AdmissionController:
    """Get or create AdmissionController instance."""
    global _admission_controller

    if _admission_controller is not None and store is None:
        return _admission_controller

    from smartsearch.infrastructure.admission import get_admission_store

    controller = AdmissionController(
        store=store or get_admission_store(),
        settings=get_settings().admission,
    )

    if store is None:
        _admission_controller = controller

    return controller


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _search_service
    global _topic_reranker
    global _training_service
    global _admission_controller

    _search_service = None
    _topic_reranker = None
    _training_service = None
    _admission_controller = None


__all__ = [
    # Factory functions
    "get_search_service",
    "get_search_log_store",
    "get_topic_reranker",
    "get_training_service",
    "get_admission_controller",
    # Reset
    "reset_services",
]
