"""Tests for background topic model training."""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest

from smartsearch.core.entities.topic import TopicModelInfo, TrainingState
from smartsearch.core.exceptions import UnsafeIdentifierError
from smartsearch.core.interfaces.topic_model import ITopicModel
from smartsearch.core.services.topic_training import TopicTrainingService


@pytest.fixture
def model() -> MagicMock:
    model = MagicMock(spec=ITopicModel)
    model.topics_info.return_value = TopicModelInfo(trained=True, num_documents=2)
    return model


@pytest.fixture
def service(mock_repository, model) -> TopicTrainingService:
    return TopicTrainingService(
        repository=mock_repository,
        model=model,
        default_collections=["actualities", "glossary"],
        excluded_fields=["status", "created_at"],
        training_limit=500,
    )


class TestBuildCorpus:
    @pytest.mark.asyncio
    async def test_keys_and_text(self, service, mock_repository, actuality_row):
        mock_repository.fetch_documents.return_value = [actuality_row]

        corpus = await service.build_corpus(["actualities"])

        assert list(corpus) == ["actualities:1"]
        text = corpus["actualities:1"]
        assert "Protection des enfants en ligne" in text
        assert "حماية الأطفال" in text
        assert "published" not in text
        assert "protection.png" not in text
        assert "protection-enfants-en-ligne" not in text
        mock_repository.fetch_documents.assert_awaited_once_with("actualities", 500)

    @pytest.mark.asyncio
    async def test_rows_without_text_skipped(self, service, mock_repository):
        mock_repository.fetch_documents.return_value = [{"id": 3, "status": "draft", "views": 4}]
        assert await service.build_corpus(["glossary"]) == {}


class TestTrain:
    @pytest.mark.asyncio
    async def test_foreground_train(self, service, mock_repository, model, actuality_row):
        mock_repository.fetch_documents.return_value = [actuality_row]

        status = await service.train()

        assert status.state == TrainingState.COMPLETED
        assert status.collections == ["actualities", "glossary"]
        assert status.num_documents == 2
        assert status.finished_at is not None
        model.train.assert_called_once()
        corpus = model.train.call_args.args[0]
        assert set(corpus) == {"actualities:1", "glossary:1"}

    @pytest.mark.asyncio
    async def test_empty_corpus_fails(self, service, model):
        status = await service.train(["glossary"])

        assert status.state == TrainingState.FAILED
        assert "no documents" in status.error
        model.train.assert_not_called()

    @pytest.mark.asyncio
    async def test_model_error_recorded(self, service, mock_repository, model, actuality_row):
        mock_repository.fetch_documents.return_value = [actuality_row]
        model.train.side_effect = ValueError("empty vocabulary")

        status = await service.train(["actualities"])

        assert status.state == TrainingState.FAILED
        assert status.error == "empty vocabulary"

    @pytest.mark.asyncio
    async def test_unsafe_collection(self, service):
        with pytest.raises(UnsafeIdentifierError):
            await service.train(["bad name"])


class TestStartTraining:
    @pytest.mark.asyncio
    async def test_runs_in_background(self, service, mock_repository, model, actuality_row):
        mock_repository.fetch_documents.return_value = [actuality_row]

        assert service.start_training(["actualities"]) is True
        status = await service.wait()

        assert status.state == TrainingState.COMPLETED
        assert service.is_running() is False

    @pytest.mark.asyncio
    async def test_second_start_while_running(self, service, mock_repository, model, actuality_row):
        mock_repository.fetch_documents.return_value = [actuality_row]
        release = threading.Event()
        model.train.side_effect = lambda corpus: release.wait(5)

        assert service.start_training() is True
        await asyncio.sleep(0.05)
        assert service.is_running() is True
        assert service.status.state == TrainingState.RUNNING

        assert service.start_training() is False

        release.set()
        status = await service.wait()
        assert status.state == TrainingState.COMPLETED
        assert model.train.call_count == 1

    def test_unsafe_collection(self, service):
        with pytest.raises(UnsafeIdentifierError):
            service.start_training(["x;y"])


class TestModelLifecycle:
    def test_model_info(self, service):
        assert service.model_info().num_documents == 2

    def test_clear(self, service, model):
        service.clear()
        model.clear.assert_called_once()
