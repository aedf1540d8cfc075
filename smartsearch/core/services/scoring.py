"""
Relevance scoring, tagging and URL building for raw collection rows.

Scoring model:
- +20 per keyword contained in the resolved title
- +10 per non-overlapping occurrence of a keyword in each searched field
- normalized against keywords*20 + keywords*fields*10, capped at 100
"""

import re
from dataclasses import dataclass, field
from typing import Any

from smartsearch.config import get_logger
from smartsearch.core.entities.search import Language, SearchResult

logger = get_logger(__name__)

NO_TITLE = "No Title"
NO_DESCRIPTION = "No description available"

TITLE_POINTS = 20
OCCURRENCE_POINTS = 10

TITLE_FIELDS = ("tuile_title", "title", "name", "word")
DESCRIPTION_FIELDS = (
    "mini_summary",
    "summary",
    "details",
    "definition",
    "tuile_text",
    "description",
    "content",
)

# Audience bucket -> landing page path
PROFILE_HOMES = {
    "PARENTS": "/parents/home",
    "TEACHERS": "/enseignants/home",
    "YOUTH": "/jeunes/home",
}

# Collection -> profile columns, in lookup order
PROFILE_COLUMNS = {
    "guides": ("profile", "profiles"),
    "advices": ("advice_profile", "profile"),
}

_HTML_TAG = re.compile(r"<[^>]*>")


@dataclass
class ScoreDetails:
    """Raw score computation for one row."""

    score: float
    matched_keywords: list[str] = field(default_factory=list)


def count_occurrences(text: str, keyword: str) -> int:
    """Count non-overlapping occurrences of keyword in text."""
    if not keyword:
        return 0
    return text.count(keyword)


def normalize_profile(raw: str | None) -> str | None:
    """Map a raw audience label onto PARENTS, TEACHERS or YOUTH when possible."""
    if raw is None or not str(raw).strip():
        return None
    up = str(raw).strip().upper()
    if up.startswith("PARENT"):
        return "PARENTS"
    if up.startswith("TEACHER") or "ENSEIGNANT" in up:
        return "TEACHERS"
    if up.startswith("YOUTH") or "JEUNE" in up:
        return "YOUTH"
    return up


def _get_string(row: dict[str, Any], key: str) -> str | None:
    value = row.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class ScoringEngine:
    """
    Turn candidate rows into ranked, language-specific results.

    Title and description are resolved only from fields of the requested
    language. Rows with neither are dropped.
    """

    def __init__(
        self,
        base_url: str = "https://www.e-himaya.gov.ma",
        description_max_length: int = 200,
    ):
        self._base_url = base_url.rstrip("/")
        self._max_description = description_max_length

    def score_and_sort(
        self,
        rows: list[dict[str, Any]],
        keywords: list[str],
        fields: list[str],
        collection: str,
        language: Language = Language.FRENCH,
        highlight: bool = False,
    ) -> list[SearchResult]:
        """
        Score rows and return them by descending score.

        Ties keep retrieval order.
        """
        results: list[SearchResult] = []

        for row in rows:
            title = self.resolve_title(row, language)
            description = self.resolve_description(row, language)
            if title is None and description is None:
                continue

            details = self.calculate_score(row, keywords, fields, title)
            display_description = description or NO_DESCRIPTION

            results.append(
                SearchResult(
                    original_id=str(row.get("id", "")),
                    collection=collection,
                    data=dict(row),
                    score=details.score,
                    matched_keywords=details.matched_keywords,
                    title=title or NO_TITLE,
                    description=display_description,
                    url=self.build_url(collection, row),
                    image_name=_get_string(row, "image_name"),
                    tag=self.build_tag(collection, row),
                    highlighted_text=(
                        highlight_keywords(display_description, details.matched_keywords)
                        if highlight
                        else None
                    ),
                )
            )

        results.sort(key=lambda r: r.score or 0.0, reverse=True)

        logger.debug(
            "rows_scored",
            collection=collection,
            candidates=len(rows),
            kept=len(results),
        )
        return results

    def resolve_title(self, row: dict[str, Any], language: Language) -> str | None:
        for name in TITLE_FIELDS:
            value = _get_string(row, f"{name}_{language.suffix}")
            if value:
                return value
        return None

    def resolve_description(self, row: dict[str, Any], language: Language) -> str | None:
        for name in DESCRIPTION_FIELDS:
            value = _get_string(row, f"{name}_{language.suffix}")
            if value:
                clean = _HTML_TAG.sub("", value).strip()
                if len(clean) > self._max_description:
                    clean = clean[: self._max_description] + "..."
                return clean
        return None

    def calculate_score(
        self,
        row: dict[str, Any],
        keywords: list[str],
        fields: list[str],
        title: str | None,
    ) -> ScoreDetails:
        total = 0.0
        matched: list[str] = []

        if title:
            lower_title = title.lower()
            for keyword in keywords:
                if keyword in lower_title:
                    total += TITLE_POINTS
                    if keyword not in matched:
                        matched.append(keyword)

        for name in fields:
            value = row.get(name)
            if value is None:
                continue
            text = str(value).lower()
            for keyword in keywords:
                occurrences = count_occurrences(text, keyword)
                if occurrences:
                    total += occurrences * OCCURRENCE_POINTS
                    if keyword not in matched:
                        matched.append(keyword)

        max_possible = len(keywords) * TITLE_POINTS + len(keywords) * len(fields) * OCCURRENCE_POINTS
        if max_possible == 0:
            return ScoreDetails(score=0.0, matched_keywords=matched)

        percentage = total / max_possible * 100
        return ScoreDetails(score=min(percentage, 100.0), matched_keywords=matched)

    def profile_of(self, collection: str, row: dict[str, Any]) -> str | None:
        """Normalized audience bucket for audience-segmented collections."""
        for column in PROFILE_COLUMNS.get(collection.lower(), ()):
            profile = normalize_profile(_get_string(row, column))
            if profile is not None:
                return profile
        return None

    def build_tag(self, collection: str, row: dict[str, Any]) -> str:
        name = collection.lower()
        if name == "actualities":
            return "actualites"
        if name in PROFILE_COLUMNS:
            profile = self.profile_of(collection, row)
            return f"{name.upper()}.{profile}" if profile else name.upper()
        return collection

    def build_url(self, collection: str, row: dict[str, Any]) -> str:
        if collection.lower() in PROFILE_COLUMNS:
            home = PROFILE_HOMES.get(self.profile_of(collection, row) or "")
            if home:
                return self._base_url + home
        return self.slug_url(collection, _get_string(row, "slug"))

    def slug_url(self, collection: str, slug: str | None) -> str:
        name = collection.lower()
        if name == "actualities":
            path = "/actualites"
            return f"{self._base_url}{path}/{slug}" if slug else self._base_url + path
        if not slug:
            return f"{self._base_url}/{collection}"
        if name == "articles":
            return f"{self._base_url}/articles/slug/{slug}"
        return f"{self._base_url}/{collection}/{slug}"


def highlight_keywords(text: str, keywords: list[str]) -> str:
    """Wrap every case-insensitive keyword occurrence in <mark> tags."""
    if not text or not keywords:
        return text
    ordered = sorted({k for k in keywords if k}, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(k) for k in ordered), re.IGNORECASE)
    return pattern.sub(lambda m: f"<mark>{m.group(0)}</mark>", text)
