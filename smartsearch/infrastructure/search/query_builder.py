"""
SQL construction for keyword matching over arbitrary collections.

Identifiers are validated and quoted; keyword values only ever travel as
bound parameters.
"""

from smartsearch.core.services.field_resolver import ensure_identifier

# SQLite type affinity rule for TEXT columns
TEXT_AFFINITY_MARKERS = ("CHAR", "CLOB", "TEXT")


def quote_identifier(kind: str, name: str) -> str:
    return f'"{ensure_identifier(kind, name)}"'


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def is_text_type(declared_type: str | None) -> bool:
    upper = (declared_type or "").upper()
    return any(marker in upper for marker in TEXT_AFFINITY_MARKERS)


def build_match_query(
    collection: str,
    fields: list[str],
    keywords: list[str],
) -> tuple[str, dict[str, str]]:
    """
    Build a query matching rows where any field contains any keyword.

    One named parameter per keyword; each (keyword, field) pair becomes a
    case-insensitive LIKE condition and all conditions are OR-ed.

    Raises:
        UnsafeIdentifierError: On a collection or field name that is not
            a plain identifier.
        ValueError: If fields or keywords is empty.
    """
    if not fields or not keywords:
        raise ValueError("fields and keywords must not be empty")

    table = quote_identifier("collection", collection)
    columns = [quote_identifier("field", name) for name in fields]

    conditions = []
    params: dict[str, str] = {}
    for i, keyword in enumerate(keywords):
        param = f"kw{i}"
        params[param] = f"%{escape_like(keyword.lower())}%"
        for column in columns:
            conditions.append(f"LOWER({column}) LIKE :{param} ESCAPE '\\'")

    sql = f"SELECT * FROM {table} WHERE " + " OR ".join(conditions)
    return sql, params
