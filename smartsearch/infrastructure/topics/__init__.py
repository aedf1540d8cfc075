"""Topic model implementations."""

from smartsearch.infrastructure.topics.lda_model import (
    LDATopicModel,
    get_topic_model,
    reset_topic_model,
)

__all__ = [
    "LDATopicModel",
    "get_topic_model",
    "reset_topic_model",
]
