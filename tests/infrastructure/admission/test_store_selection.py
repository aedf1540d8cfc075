"""Tests for admission store selection from settings."""

import pytest

from smartsearch.config import AdmissionSettings, reset_settings
from smartsearch.infrastructure import admission as admission_module
from smartsearch.infrastructure.admission import (
    InMemoryAdmissionStore,
    RedisAdmissionStore,
    get_admission_store,
)


@pytest.fixture(autouse=True)
def fresh_store(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(admission_module, "_store", None)


class TestBackendSelection:
    def test_default_backend_is_shared_store(self, monkeypatch):
        monkeypatch.delenv("ADMISSION_BACKEND", raising=False)
        assert AdmissionSettings().backend == "redis"

    def test_default_creates_redis_store(self, monkeypatch):
        monkeypatch.delenv("ADMISSION_BACKEND", raising=False)
        reset_settings()

        assert isinstance(get_admission_store(), RedisAdmissionStore)

    def test_memory_is_opt_in(self, monkeypatch):
        monkeypatch.setenv("ADMISSION_BACKEND", "memory")
        reset_settings()

        store = get_admission_store()

        assert isinstance(store, InMemoryAdmissionStore)
        assert get_admission_store() is store
