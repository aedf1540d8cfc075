"""
Script-based language detection (Arabic vs French).
"""

import re

from smartsearch.core.entities.search import Language

_ARABIC_CHARS = re.compile(
    r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]"
)
_LATIN_CHARS = re.compile(r"[a-zA-Z\u00C0-\u024F]")


class LanguageDetector:
    """Classify text by counting Arabic and Latin characters."""

    def detect_language(self, text: str | None) -> Language:
        """
        Detect the dominant script of text.

        Text without characters of either script is French. Ties go to
        Arabic.
        """
        if not text or not text.strip():
            return Language.FRENCH

        arabic = len(_ARABIC_CHARS.findall(text))
        latin = len(_LATIN_CHARS.findall(text))

        if arabic == 0 and latin == 0:
            return Language.FRENCH
        return Language.ARABIC if arabic >= latin else Language.FRENCH

    def has_script(self, text: str | None) -> bool:
        """True if text contains any character of either script."""
        return self.contains_arabic(text) or self.contains_french(text)

    def contains_arabic(self, text: str | None) -> bool:
        return bool(text) and _ARABIC_CHARS.search(text) is not None

    def contains_french(self, text: str | None) -> bool:
        return bool(text) and _LATIN_CHARS.search(text) is not None
