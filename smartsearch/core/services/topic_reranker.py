"""
Topic-similarity re-ranking.

Boosts keyword results by the cosine similarity between the query's topic
distribution and each result's, using a trained topic model.
"""

import numpy as np

from smartsearch.config import get_logger
from smartsearch.core.entities.search import SearchResult, SimilarResult
from smartsearch.core.interfaces.topic_model import ITopicModel
from smartsearch.core.services.scoring import NO_DESCRIPTION, NO_TITLE

logger = get_logger(__name__)


def cosine_similarity(a: list[float] | np.ndarray, b: list[float] | np.ndarray) -> float:
    """Cosine similarity; 0 for zero-norm vectors or mismatched lengths."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape or va.size == 0:
        return 0.0

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def content_of(result: SearchResult) -> str:
    """Best available text of a result for topic inference."""
    parts = []
    if result.title and result.title != NO_TITLE:
        parts.append(result.title)
    if result.description and result.description != NO_DESCRIPTION:
        parts.append(result.description)
    return " ".join(parts)


class TopicReranker:
    """
    Re-rank results by topic similarity to the query.

    Owns the per-content topic vector cache. The cache belongs to one model
    generation and is dropped wholesale when the model is retrained or
    cleared.
    """

    MAX_ATTEMPTS = 3

    def __init__(
        self,
        model: ITopicModel,
        similar_results: int = 3,
        min_similarity: float = 0.1,
        max_cache_size: int = 10000,
    ):
        self._model = model
        self._similar_results = similar_results
        self._min_similarity = min_similarity
        self._max_cache_size = max_cache_size

        self._cache: dict[str, np.ndarray] = {}
        self._cache_generation = model.generation

    @property
    def is_active(self) -> bool:
        return self._model.is_trained()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def rerank(self, query: str, results: list[SearchResult]) -> list[SearchResult]:
        """
        Return results re-scored and re-sorted by topic similarity.

        No-op while the model is untrained. Vectors are only compared and
        cached when the model generation is the same before and after
        inference; a retrain in between restarts the pass.
        """
        for _ in range(self.MAX_ATTEMPTS):
            if not results or not self._model.is_trained():
                return results

            generation = self._model.generation
            self._sync_generation(generation)

            fresh: dict[str, np.ndarray] = {}
            query_vector = np.asarray(self._model.infer_vector(query), dtype=np.float64)
            vectors = [self._vector_for(content_of(r), fresh) for r in results]

            if self._model.generation == generation:
                self._store(fresh)
                return self._apply(results, query_vector, vectors)

            logger.info("topic_model_changed_during_rerank", generation=generation)

        logger.warning("topic_rerank_skipped", reason="model_changing", attempts=self.MAX_ATTEMPTS)
        return results

    def _apply(
        self,
        results: list[SearchResult],
        query_vector: np.ndarray,
        vectors: list[np.ndarray],
    ) -> list[SearchResult]:
        reranked: list[SearchResult] = []
        for result, vector in zip(results, vectors):
            similarity = cosine_similarity(query_vector, vector)
            base = result.score
            new_score = base * (1 + similarity) if base is not None else similarity

            reranked.append(
                result.model_copy(
                    update={
                        "score": new_score,
                        "topic_distribution": vector.tolist(),
                        "dominant_topic": int(np.argmax(vector)) if vector.sum() > 0 else None,
                    }
                )
            )

        self._attach_similar(reranked, vectors)

        order = sorted(range(len(reranked)), key=lambda i: reranked[i].score or 0.0, reverse=True)

        logger.debug(
            "results_reranked",
            results=len(reranked),
            cache_size=len(self._cache),
            generation=self._cache_generation,
        )
        return [reranked[i] for i in order]

    def _sync_generation(self, generation: int) -> None:
        if generation != self._cache_generation:
            logger.info(
                "topic_cache_invalidated",
                previous_generation=self._cache_generation,
                generation=generation,
                dropped=len(self._cache),
            )
            self._cache.clear()
            self._cache_generation = generation

    def _vector_for(self, content: str, fresh: dict[str, np.ndarray]) -> np.ndarray:
        cached = self._cache.get(content)
        if cached is None:
            cached = fresh.get(content)
        if cached is not None:
            return cached

        vector = np.asarray(self._model.infer_vector(content), dtype=np.float64)
        fresh[content] = vector
        return vector

    def _store(self, fresh: dict[str, np.ndarray]) -> None:
        if len(self._cache) + len(fresh) > self._max_cache_size:
            self._cache.clear()
        self._cache.update(fresh)

    def _attach_similar(self, results: list[SearchResult], vectors: list[np.ndarray]) -> None:
        if self._similar_results <= 0:
            return

        for i, result in enumerate(results):
            candidates = []
            for j, other in enumerate(results):
                if i == j:
                    continue
                similarity = cosine_similarity(vectors[i], vectors[j])
                if similarity > self._min_similarity:
                    candidates.append((similarity, other))

            candidates.sort(key=lambda c: c[0], reverse=True)
            result.similar_results = [
                SimilarResult(
                    original_id=other.original_id,
                    collection=other.collection,
                    title=other.title,
                    similarity=similarity,
                )
                for similarity, other in candidates[: self._similar_results]
            ]
