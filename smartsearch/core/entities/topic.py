"""
Topic model entities.

Describe the state of the trained model and of background training.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TopicInfo(BaseModel):
    """Top words of one latent topic."""

    topic_id: int
    top_words: list[str] = Field(default_factory=list)


class TopicModelInfo(BaseModel):
    """Snapshot metadata of the topic model."""

    trained: bool = False
    num_documents: int = 0
    num_topics: int = 0
    vocabulary_size: int = 0
    topics: list[TopicInfo] = Field(default_factory=list)
    generation: int = 0
    trained_at: datetime | None = None


class TrainingState(str, Enum):
    """Background training state."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class TrainingStatus(BaseModel):
    """Status of the most recent training run."""

    state: TrainingState = TrainingState.IDLE
    collections: list[str] = Field(default_factory=list)
    num_documents: int = 0
    started_at: datetime | None = None
    finished_at: datetime | None = None
    error: str | None = None

    @property
    def is_running(self) -> bool:
        return self.state == TrainingState.RUNNING
