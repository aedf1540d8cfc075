"""Configuration module."""

from smartsearch.config.logging import configure_logging, get_logger
from smartsearch.config.settings import (
    AdmissionSettings,
    Settings,
    get_settings,
    reset_settings,
)
from smartsearch.config.stopwords import (
    IMPORTANT_SHORT_WORDS,
    STOP_WORDS,
    is_important_short_word,
    is_stop_word,
)

__all__ = [
    "Settings",
    "AdmissionSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "STOP_WORDS",
    "IMPORTANT_SHORT_WORDS",
    "is_stop_word",
    "is_important_short_word",
]
