"""
Searchable field resolution and identifier checks.
"""

import re

from smartsearch.config import get_logger
from smartsearch.core.exceptions import UnsafeIdentifierError
from smartsearch.core.interfaces.storage import ISearchRepository

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"[a-zA-Z0-9_]+")


def is_safe_identifier(name: str | None) -> bool:
    return bool(name) and _IDENTIFIER.fullmatch(name) is not None


def ensure_identifier(kind: str, name: str | None) -> str:
    """
    Validate a collection or field name before it is put into query text.

    Raises:
        UnsafeIdentifierError: If name is not letters, digits and underscores.
    """
    if not is_safe_identifier(name):
        raise UnsafeIdentifierError(kind, name or "")
    return name


class FieldResolver:
    """Pick the fields of a collection that a search should match against."""

    def __init__(self, repository: ISearchRepository, excluded_fields: list[str]):
        self._repository = repository
        self._excluded = {name.lower() for name in excluded_fields}

    async def resolve(self, collection: str, fields: list[str] | None = None) -> list[str]:
        """
        Explicit fields win; otherwise use the collection's text fields
        minus the deny-list.
        """
        if fields:
            return list(fields)

        text_fields = await self._repository.get_text_fields(collection)
        resolved = [name for name in text_fields if name.lower() not in self._excluded]

        logger.debug(
            "fields_resolved",
            collection=collection,
            fields=resolved,
            excluded=len(text_fields) - len(resolved),
        )
        return resolved
