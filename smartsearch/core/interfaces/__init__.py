"""Core interfaces (ports) for dependency injection."""

from smartsearch.core.interfaces.admission import IAdmissionStore
from smartsearch.core.interfaces.storage import ISearchLogStore, ISearchRepository
from smartsearch.core.interfaces.topic_model import ITopicModel

__all__ = [
    # Storage
    "ISearchRepository",
    "ISearchLogStore",
    # Topic model
    "ITopicModel",
    # Admission
    "IAdmissionStore",
]
