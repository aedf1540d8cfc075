"""
Core business logic services.

Layer-pure services that depend only on:
- smartsearch/core/entities/*
- smartsearch/core/interfaces/*
- smartsearch/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from smartsearch.core.services.admission import AdmissionController, resolve_client_identity
from smartsearch.core.services.field_resolver import (
    FieldResolver,
    ensure_identifier,
    is_safe_identifier,
)
from smartsearch.core.services.keyword_extractor import KeywordExtractor, get_keyword_extractor
from smartsearch.core.services.language_detector import LanguageDetector
from smartsearch.core.services.scoring import ScoringEngine, normalize_profile
from smartsearch.core.services.search_service import SearchService, paginate
from smartsearch.core.services.topic_reranker import TopicReranker, cosine_similarity
from smartsearch.core.services.topic_training import TopicTrainingService

__all__ = [
    # Text
    "KeywordExtractor",
    "get_keyword_extractor",
    "LanguageDetector",
    # Search
    "FieldResolver",
    "ensure_identifier",
    "is_safe_identifier",
    "ScoringEngine",
    "normalize_profile",
    "SearchService",
    "paginate",
    # Topics
    "TopicReranker",
    "cosine_similarity",
    "TopicTrainingService",
    # Admission
    "AdmissionController",
    "resolve_client_identity",
]
