"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from functools import lru_cache

from smartsearch.application.use_cases import (
    ListSearchLogsUseCase,
    SearchContentUseCase,
    TopicAwareSearchUseCase,
    TrainTopicModelUseCase,
)
from smartsearch.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Use case dependencies
def get_search_content_use_case() -> SearchContentUseCase:
    """Get search content use case."""
    return SearchContentUseCase()


def get_search_logs_use_case() -> ListSearchLogsUseCase:
    """Get search logs use case."""
    return ListSearchLogsUseCase()


def get_topic_aware_search_use_case() -> TopicAwareSearchUseCase:
    """Get topic-aware search use case."""
    return TopicAwareSearchUseCase()


def get_train_topic_model_use_case() -> TrainTopicModelUseCase:
    """Get topic model use case."""
    return TrainTopicModelUseCase()
