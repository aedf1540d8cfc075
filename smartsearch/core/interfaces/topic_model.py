"""
Abstract interface for the statistical topic model.

Methods are synchronous: training is CPU bound and is pushed to a worker
thread by the caller.
"""

from abc import ABC, abstractmethod

from smartsearch.core.entities.topic import TopicModelInfo


class ITopicModel(ABC):
    """Train/infer contract consumed by the topic re-ranker."""

    @abstractmethod
    def train(self, corpus: dict[str, str]) -> None:
        """Train on a mapping of document id to text. Serialized internally."""
        pass

    @abstractmethod
    def is_trained(self) -> bool:
        pass

    @abstractmethod
    def infer_vector(self, text: str) -> list[float]:
        """Return a fixed-length non-negative topic distribution."""
        pass

    @abstractmethod
    def topics_info(self) -> TopicModelInfo:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop the trained model."""
        pass

    @property
    @abstractmethod
    def generation(self) -> int:
        """Increases on every successful train or clear."""
        pass
