"""Application use cases."""

from smartsearch.application.use_cases.search_content import (
    ListSearchLogsUseCase,
    SearchContentUseCase,
    SearchOutcomeDTO,
)
from smartsearch.application.use_cases.topic_aware_search import TopicAwareSearchUseCase
from smartsearch.application.use_cases.train_topic_model import TrainTopicModelUseCase

__all__ = [
    "SearchContentUseCase",
    "SearchOutcomeDTO",
    "ListSearchLogsUseCase",
    "TopicAwareSearchUseCase",
    "TrainTopicModelUseCase",
]
