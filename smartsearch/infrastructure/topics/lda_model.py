"""
LDA topic model on scikit-learn.

Training builds a complete snapshot (vectorizer, fitted model, topic
summary) under a lock and publishes it with a single reference swap.
Inference always works on whichever snapshot is current, so readers never
see a half-trained model and never wait on training.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import numpy as np
from sklearn.decomposition import LatentDirichletAllocation
from sklearn.feature_extraction.text import CountVectorizer

from smartsearch.config import get_logger, get_settings
from smartsearch.core.entities.topic import TopicInfo, TopicModelInfo
from smartsearch.core.exceptions import TopicModelTrainingError
from smartsearch.core.interfaces.topic_model import ITopicModel
from smartsearch.core.services.keyword_extractor import get_keyword_extractor

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    vectorizer: CountVectorizer
    lda: LatentDirichletAllocation
    num_documents: int
    vocabulary_size: int
    topics: list[TopicInfo]
    trained_at: datetime


class LDATopicModel(ITopicModel):
    """Latent Dirichlet Allocation topic model."""

    def __init__(
        self,
        num_topics: int = 10,
        max_iterations: int = 50,
        top_words: int = 10,
        doc_topic_prior: float = 0.1,
        topic_word_prior: float = 0.01,
        random_state: int | None = 42,
        tokenizer: Callable[[str], list[str]] | None = None,
    ):
        self.num_topics = num_topics
        self.max_iterations = max_iterations
        self.top_words = top_words
        self.doc_topic_prior = doc_topic_prior
        self.topic_word_prior = topic_word_prior
        self.random_state = random_state
        self._tokenizer = tokenizer or get_keyword_extractor().tokenize

        self._train_lock = threading.Lock()
        self._snapshot: _Snapshot | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def is_trained(self) -> bool:
        return self._snapshot is not None

    def train(self, corpus: dict[str, str]) -> None:
        """
        Fit a new model on the corpus and swap it in.

        Raises:
            TopicModelTrainingError: If fitting fails; the previous model
                stays in place.
        """
        if not corpus:
            logger.warning("topic_training_skipped", reason="empty_corpus")
            return

        with self._train_lock:
            documents = list(corpus.values())
            logger.info(
                "topic_training_started",
                documents=len(documents),
                topics=self.num_topics,
            )

            try:
                vectorizer = CountVectorizer(
                    tokenizer=self._tokenizer,
                    lowercase=False,
                    token_pattern=None,
                )
                counts = vectorizer.fit_transform(documents)

                lda = LatentDirichletAllocation(
                    n_components=self.num_topics,
                    doc_topic_prior=self.doc_topic_prior,
                    topic_word_prior=self.topic_word_prior,
                    learning_method="batch",
                    max_iter=self.max_iterations,
                    random_state=self.random_state,
                )
                lda.fit(counts)
            except ValueError as e:
                logger.error("topic_training_failed", documents=len(documents), error=str(e))
                raise TopicModelTrainingError(str(e), num_documents=len(documents)) from e

            vocabulary = vectorizer.get_feature_names_out()
            topics = [
                TopicInfo(
                    topic_id=topic_id,
                    top_words=[str(vocabulary[i]) for i in np.argsort(weights)[::-1][: self.top_words]],
                )
                for topic_id, weights in enumerate(lda.components_)
            ]

            # Bump before the swap; readers re-check the generation after inferring
            self._generation += 1
            self._snapshot = _Snapshot(
                vectorizer=vectorizer,
                lda=lda,
                num_documents=len(documents),
                vocabulary_size=len(vocabulary),
                topics=topics,
                trained_at=datetime.utcnow(),
            )

        logger.info(
            "topic_model_trained",
            documents=len(documents),
            vocabulary_size=len(vocabulary),
            generation=self._generation,
        )
        for topic in topics:
            logger.debug("topic_top_words", topic_id=topic.topic_id, words=topic.top_words)

    def infer_vector(self, text: str) -> list[float]:
        """
        Topic distribution of text.

        All zeros while untrained or when no token of text is in the
        vocabulary.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return [0.0] * self.num_topics

        counts = snapshot.vectorizer.transform([text or ""])
        if counts.nnz == 0:
            return [0.0] * self.num_topics

        distribution = snapshot.lda.transform(counts)[0]
        return [float(p) for p in distribution]

    def topics_info(self) -> TopicModelInfo:
        snapshot = self._snapshot
        if snapshot is None:
            return TopicModelInfo(trained=False, generation=self._generation)

        return TopicModelInfo(
            trained=True,
            num_documents=snapshot.num_documents,
            num_topics=self.num_topics,
            vocabulary_size=snapshot.vocabulary_size,
            topics=snapshot.topics,
            generation=self._generation,
            trained_at=snapshot.trained_at,
        )

    def clear(self) -> None:
        with self._train_lock:
            self._generation += 1
            self._snapshot = None
        logger.info("topic_model_cleared", generation=self._generation)


# Singleton instance
_topic_model: LDATopicModel | None = None


def get_topic_model() -> LDATopicModel:
    """Get or create topic model singleton."""
    global _topic_model
    if _topic_model is None:
        settings = get_settings().topic
        _topic_model = LDATopicModel(
            num_topics=settings.num_topics,
            max_iterations=settings.max_iterations,
            top_words=settings.top_words,
            doc_topic_prior=settings.doc_topic_prior,
            topic_word_prior=settings.topic_word_prior,
            random_state=settings.random_state,
        )
    return _topic_model


def reset_topic_model() -> None:
    """Reset topic model singleton (for testing)."""
    global _topic_model
    _topic_model = None
