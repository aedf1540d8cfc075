"""Search infrastructure implementations."""

from smartsearch.infrastructure.search.keyword_search import (
    SQLiteSearchRepository,
    get_search_repository,
)
from smartsearch.infrastructure.search.query_builder import (
    build_match_query,
    is_text_type,
    quote_identifier,
)

__all__ = [
    "SQLiteSearchRepository",
    "get_search_repository",
    "build_match_query",
    "is_text_type",
    "quote_identifier",
]
