"""Admission store implementations."""

from smartsearch.config import get_logger, get_settings
from smartsearch.core.interfaces.admission import IAdmissionStore
from smartsearch.infrastructure.admission.memory_store import InMemoryAdmissionStore
from smartsearch.infrastructure.admission.redis_store import (
    COUNTER_SCRIPT,
    TOKEN_BUCKET_SCRIPT,
    RedisAdmissionStore,
)

logger = get_logger(__name__)

_store: IAdmissionStore | None = None


def get_admission_store() -> IAdmissionStore:
    """Get or create the configured admission store."""
    global _store
    if _store is None:
        settings = get_settings().admission
        if settings.backend == "redis":
            _store = RedisAdmissionStore(url=settings.redis_url)
        else:
            _store = InMemoryAdmissionStore()
        logger.info("admission_store_created", backend=settings.backend)
    return _store


async def close_admission_store() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None


__all__ = [
    "InMemoryAdmissionStore",
    "RedisAdmissionStore",
    "COUNTER_SCRIPT",
    "TOKEN_BUCKET_SCRIPT",
    "get_admission_store",
    "close_admission_store",
]
