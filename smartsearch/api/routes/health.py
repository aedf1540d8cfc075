"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from smartsearch.application.dto.responses import ComponentHealthResponse, HealthResponse
from smartsearch.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _topic_model_trained() -> bool:
    from smartsearch.infrastructure.topics import get_topic_model

    return get_topic_model().is_trained()


async def check_database() -> ComponentHealthResponse:
    """Run a trivial query against the pool."""
    from smartsearch.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000

        return ComponentHealthResponse(
            name="sqlite",
            healthy=True,
            latency_ms=latency,
            details={"available_connections": pool.available},
        )

    except Exception as e:
        return ComponentHealthResponse(name="sqlite", healthy=False, error=str(e))


async def check_admission_store() -> ComponentHealthResponse:
    """Ping the shared admission store when it is Redis."""
    settings = get_settings().admission
    if not settings.enabled:
        return ComponentHealthResponse(name="admission", healthy=True, details={"enabled": False})

    from smartsearch.infrastructure.admission import RedisAdmissionStore, get_admission_store

    store = get_admission_store()
    if not isinstance(store, RedisAdmissionStore):
        return ComponentHealthResponse(name=settings.backend, healthy=True)

    try:
        start = time.time()
        healthy = await store.ping()
        return ComponentHealthResponse(
            name="redis",
            healthy=healthy,
            latency_ms=(time.time() - start) * 1000,
            error=None if healthy else "ping failed",
        )
    except Exception as e:
        return ComponentHealthResponse(name="redis", healthy=False, error=str(e))


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and admission store status. A failing
    admission store only degrades the service since admission fails open.
    """
    admission = await check_admission_store()
    return HealthResponse(
        status="healthy" if admission.healthy else "degraded",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        admission_store=admission,
        topic_model_trained=_topic_model_trained(),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    db_status = await check_database()
    return HealthResponse(
        status="healthy" if db_status.healthy else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
