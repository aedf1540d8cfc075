"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartsearch.api.middleware import (
    AdmissionMiddleware,
    ErrorHandlerMiddleware,
    LoggingMiddleware,
)
from smartsearch.api.middleware.error_handler import setup_exception_handlers
from smartsearch.api.routes import health_router, search_router, topics_router
from smartsearch.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Initializes resources on startup and cleans up on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        environment=settings.environment,
    )

    # Initialize database
    try:
        from smartsearch.infrastructure.storage.sqlite import get_pool
        from smartsearch.infrastructure.storage.sqlite.migrations import ensure_schema

        await ensure_schema()
        logger.info("database_initialized")

        # Initialize connection pool
        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info(
        "application_started",
        collections=settings.search.collections,
        admission_enabled=settings.admission.enabled,
        admission_backend=settings.admission.backend,
    )

    yield

    # Shutdown
    logger.info("application_stopping")

    # Flush background analytics writes
    try:
        from smartsearch.application.services import get_search_service

        await get_search_service().wait_for_pending_logs()

    except Exception as e:
        logger.warning("search_log_flush_failed", error=str(e))

    # Close admission store
    try:
        from smartsearch.infrastructure.admission import close_admission_store

        await close_admission_store()

    except Exception as e:
        logger.warning("admission_store_close_failed", error=str(e))

    # Close connection pool
    try:
        from smartsearch.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Multilingual keyword search with topic re-ranking and admission control",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware (last added runs first)
    app.add_middleware(AdmissionMiddleware, settings=settings.admission)
    app.add_middleware(LoggingMiddleware, settings=settings.admission)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(search_router)
    app.include_router(topics_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "smartsearch.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
