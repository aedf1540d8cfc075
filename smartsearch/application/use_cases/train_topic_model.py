"""
Topic Model Use Cases.

Trigger background training, report model status and clear the model.
"""

import time

from smartsearch.application.dto.responses import (
    ClearModelResponse,
    ModelStatusResponse,
    TrainingStatusResponse,
    TrainModelResponse,
)
from smartsearch.application.services import get_training_service
from smartsearch.config import get_logger
from smartsearch.core.services import TopicTrainingService

logger = get_logger(__name__)


class TrainTopicModelUseCase:
    """
    Manage the topic model lifecycle.

    Training runs as a background task; only one run is active at a time.
    """

    def __init__(self, training_service: TopicTrainingService | None = None):
        self._training = training_service

    def _get_training(self) -> TopicTrainingService:
        if self._training is None:
            self._training = get_training_service()
        return self._training

    def start(self, collections: list[str] | None = None) -> TrainModelResponse:
        """
        Schedule training.

        Raises:
            UnsafeIdentifierError: If a collection name is not an identifier.
        """
        start = time.time()
        training = self._get_training()
        started = training.start_training(collections)
        status = training.status

        if started:
            message = f"Training started on {len(status.collections)} collection(s)"
        else:
            message = "Training already in progress"

        return TrainModelResponse(
            status="started" if started else "already_running",
            collections=status.collections,
            message=message,
            processing_time_ms=round((time.time() - start) * 1000, 2),
        )

    def status(self) -> ModelStatusResponse:
        training = self._get_training()
        info = training.model_info()
        run = training.status

        return ModelStatusResponse(
            trained=info.trained,
            num_documents=info.num_documents,
            num_topics=info.num_topics,
            vocabulary_size=info.vocabulary_size,
            topics={topic.topic_id: topic.top_words for topic in info.topics},
            generation=info.generation,
            trained_at=info.trained_at,
            training=TrainingStatusResponse(
                state=run.state.value,
                collections=run.collections,
                num_documents=run.num_documents,
                started_at=run.started_at,
                finished_at=run.finished_at,
                error=run.error,
            ),
        )

    def clear(self) -> ClearModelResponse:
        self._get_training().clear()
        return ClearModelResponse()
