"""Infrastructure layer implementations."""

from smartsearch.infrastructure import admission, search, storage, topics

__all__ = ["admission", "search", "storage", "topics"]
