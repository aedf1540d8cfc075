"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from smartsearch.core.entities.search import Language, SearchRequest
from smartsearch.core.exceptions import ValidationError
from smartsearch.core.services.field_resolver import ensure_identifier

SUPPORTED_LANGUAGES = [language.value for language in Language]


class SmartSearchRequest(BaseModel):
    """Request for keyword search.

    Without a collection the query fans out to every configured collection.
    Blank queries are rejected by the search service with INVALID_QUERY.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(
        ...,
        max_length=500,
        description="Search query text",
        examples=["protection des enfants en ligne", "الأمن الرقمي"],
    )
    collection: str | None = Field(
        default=None,
        validation_alias=AliasChoices("collection", "table_name", "tableName"),
        description="Collection to search; omit to search all collections",
        examples=["actualities", "guides"],
    )
    fields: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("fields", "search_fields", "searchFields"),
        description="Fields to match; omit to use all text fields",
    )
    language: str = Field(
        default=Language.FRENCH.value,
        description="Preferred language when the query has no letters: french or arabic",
    )
    page: int = Field(default=0, ge=0, description="Page number (0-based)")
    size: int = Field(default=20, ge=0, le=200, description="Page size (0 = all)")
    sort_field: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sort_field", "sortField"),
        description="Accepted for compatibility; results are ranked by score",
    )
    sort_ascending: bool = Field(
        default=True,
        validation_alias=AliasChoices("sort_ascending", "sortAscending"),
    )
    highlight_matches: bool = Field(
        default=True,
        validation_alias=AliasChoices("highlight_matches", "highlightMatches"),
        description="Wrap matched keywords of the description in <mark> tags",
    )
    use_semantic_search: bool = Field(
        default=False,
        validation_alias=AliasChoices("use_semantic_search", "useSemanticSearch"),
        description="Reserved for vector search",
    )
    query_vector: list[float] | None = Field(
        default=None,
        validation_alias=AliasChoices("query_vector", "queryVector"),
        description="Reserved for vector search",
    )

    def to_domain(self, force_fan_out: bool = False) -> SearchRequest:
        """
        Convert to the domain request.

        Raises:
            ValidationError: On an unsupported language.
            UnsafeIdentifierError: On a sort field that is not an identifier.
        """
        language = (self.language or "").strip().lower()
        if language not in SUPPORTED_LANGUAGES:
            raise ValidationError(
                field="language",
                message=f"Unsupported language. Supported languages are: {', '.join(SUPPORTED_LANGUAGES)}",
                value=self.language,
            )
        if self.sort_field:
            ensure_identifier("sort field", self.sort_field)

        return SearchRequest(
            query=self.query,
            collection=None if force_fan_out else (self.collection or None),
            fields=self.fields or None,
            language=Language(language),
            page=self.page,
            size=self.size,
            sort_field=self.sort_field,
            sort_ascending=self.sort_ascending,
            highlight_matches=self.highlight_matches,
            use_semantic_search=self.use_semantic_search,
            query_vector=self.query_vector,
        )
