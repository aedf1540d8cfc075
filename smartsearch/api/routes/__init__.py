"""API route modules."""

from smartsearch.api.routes.health import router as health_router
from smartsearch.api.routes.search import router as search_router
from smartsearch.api.routes.topics import router as topics_router

__all__ = [
    "health_router",
    "search_router",
    "topics_router",
]
