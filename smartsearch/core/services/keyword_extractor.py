"""
Keyword extraction for search queries and topic-model corpora.
"""

import re

from smartsearch.config.stopwords import IMPORTANT_SHORT_WORDS, STOP_WORDS

# Anything outside latin alphanumerics, whitespace and the Arabic block
_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9\s\u0600-\u06FF]")


class KeywordExtractor:
    """
    Normalize free text into search terms.

    Lowercases, strips punctuation, drops short tokens (unless they are
    known acronyms) and stop words. Never raises.
    """

    def __init__(
        self,
        stop_words: frozenset[str] = STOP_WORDS,
        important_short_words: frozenset[str] = IMPORTANT_SHORT_WORDS,
        min_length: int = 3,
    ):
        self._stop_words = stop_words
        self._important = important_short_words
        self._min_length = min_length

    def tokenize(self, text: str | None) -> list[str]:
        """Filtered tokens in order, repetitions kept."""
        if not text or not text.strip():
            return []

        normalized = _DISALLOWED_CHARS.sub(" ", text.lower())
        tokens = []
        for token in normalized.split():
            if len(token) < self._min_length and token not in self._important:
                continue
            if token in self._stop_words:
                continue
            tokens.append(token)
        return tokens

    def extract_keywords(self, text: str | None) -> list[str]:
        """Unique keywords, first occurrence order preserved."""
        return list(dict.fromkeys(self.tokenize(text)))


_extractor: KeywordExtractor | None = None


def get_keyword_extractor() -> KeywordExtractor:
    """Get or create keyword extractor singleton."""
    global _extractor
    if _extractor is None:
        _extractor = KeywordExtractor()
    return _extractor
