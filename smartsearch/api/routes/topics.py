"""
Topic model endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from smartsearch.api.dependencies import get_train_topic_model_use_case
from smartsearch.application.dto.responses import (
    ClearModelResponse,
    ModelStatusResponse,
    TrainModelResponse,
)
from smartsearch.application.use_cases import TrainTopicModelUseCase

router = APIRouter(prefix="/api/model", tags=["topics"])


@router.post(
    "/train",
    response_model=TrainModelResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def train_model(
    collection: list[str] | None = Query(default=None),
    use_case: TrainTopicModelUseCase = Depends(get_train_topic_model_use_case),
) -> TrainModelResponse:
    """
    Start topic model training in the background.

    Repeat the collection parameter to train on several collections; without
    it the configured training collections are used.
    """
    return use_case.start(collection)


@router.get("/status", response_model=ModelStatusResponse)
async def model_status(
    use_case: TrainTopicModelUseCase = Depends(get_train_topic_model_use_case),
) -> ModelStatusResponse:
    """Model metadata, discovered topics and the latest training run."""
    return use_case.status()


@router.delete("", response_model=ClearModelResponse)
async def clear_model(
    use_case: TrainTopicModelUseCase = Depends(get_train_topic_model_use_case),
) -> ClearModelResponse:
    """Discard the trained model; chatbot search falls back to keyword ranking."""
    return use_case.clear()
