"""API middleware."""

from smartsearch.api.middleware.admission import AdmissionMiddleware
from smartsearch.api.middleware.error_handler import ErrorHandlerMiddleware
from smartsearch.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware", "AdmissionMiddleware"]
