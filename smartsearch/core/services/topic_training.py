"""
Topic model training orchestration.

Builds a corpus from stored collections and trains the topic model in a
worker thread, off the request path. One training run at a time.
"""

import asyncio
from datetime import datetime
from typing import Any

from smartsearch.config import get_logger
from smartsearch.core.entities.topic import TopicModelInfo, TrainingState, TrainingStatus
from smartsearch.core.exceptions import TopicModelTrainingError
from smartsearch.core.interfaces.storage import ISearchRepository
from smartsearch.core.interfaces.topic_model import ITopicModel
from smartsearch.core.services.field_resolver import ensure_identifier

logger = get_logger(__name__)

# Columns that never carry prose
_NON_TEXT_COLUMNS = {"slug", "image_name"}


class TopicTrainingService:
    """Start, track and clear topic model training."""

    def __init__(
        self,
        repository: ISearchRepository,
        model: ITopicModel,
        default_collections: list[str],
        excluded_fields: list[str] | None = None,
        training_limit: int = 10000,
    ):
        self._repository = repository
        self._model = model
        self._default_collections = list(default_collections)
        self._excluded = {name.lower() for name in (excluded_fields or [])} | _NON_TEXT_COLUMNS
        self._training_limit = training_limit

        self._status = TrainingStatus()
        self._task: asyncio.Task | None = None

    @property
    def status(self) -> TrainingStatus:
        return self._status

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start_training(self, collections: list[str] | None = None) -> bool:
        """
        Schedule a background training run.

        Returns:
            False if a run is already in progress, True if one was started.

        Raises:
            UnsafeIdentifierError: If a collection name is not an identifier.
        """
        targets = list(collections) if collections else list(self._default_collections)
        for name in targets:
            ensure_identifier("collection", name)

        if self.is_running():
            logger.info("topic_training_already_running", collections=self._status.collections)
            return False

        self._status = TrainingStatus(
            state=TrainingState.RUNNING,
            collections=targets,
            started_at=datetime.utcnow(),
        )
        self._task = asyncio.create_task(self._run(targets))
        logger.info("topic_training_scheduled", collections=targets)
        return True

    async def train(self, collections: list[str] | None = None) -> TrainingStatus:
        """Train in the foreground and return the final status."""
        targets = list(collections) if collections else list(self._default_collections)
        for name in targets:
            ensure_identifier("collection", name)
        self._status = TrainingStatus(
            state=TrainingState.RUNNING,
            collections=targets,
            started_at=datetime.utcnow(),
        )
        await self._run(targets)
        return self._status

    async def wait(self) -> TrainingStatus:
        """Wait for the current background run, if any."""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
        return self._status

    async def build_corpus(self, collections: list[str]) -> dict[str, str]:
        """Map '<collection>:<id>' to the concatenated text of each row."""
        corpus: dict[str, str] = {}
        for collection in collections:
            rows = await self._repository.fetch_documents(collection, self._training_limit)
            for row in rows:
                text = self._row_text(row)
                if text:
                    corpus[f"{collection}:{row.get('id')}"] = text
            logger.debug("topic_corpus_collection_loaded", collection=collection, rows=len(rows))
        return corpus

    def model_info(self) -> TopicModelInfo:
        return self._model.topics_info()

    def clear(self) -> None:
        self._model.clear()
        logger.info("topic_model_cleared")

    def _row_text(self, row: dict[str, Any]) -> str:
        parts = [
            value.strip()
            for key, value in row.items()
            if key.lower() not in self._excluded and isinstance(value, str) and value.strip()
        ]
        return " ".join(parts)

    async def _run(self, collections: list[str]) -> None:
        try:
            corpus = await self.build_corpus(collections)
            if not corpus:
                raise TopicModelTrainingError("no documents found", num_documents=0)

            self._status.num_documents = len(corpus)
            await asyncio.to_thread(self._model.train, corpus)

            self._status.state = TrainingState.COMPLETED
            logger.info(
                "topic_training_completed",
                collections=collections,
                documents=len(corpus),
            )
        except Exception as e:
            self._status.state = TrainingState.FAILED
            self._status.error = str(e)
            logger.error("topic_training_failed", collections=collections, error=str(e))
        finally:
            self._status.finished_at = datetime.utcnow()
