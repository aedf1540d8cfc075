"""
Request logging middleware.

Binds request_id and client_id to the structlog context for everything
logged while a request runs. The admission middleware sits inside this one
and leaves its decision on request.state, so each request ends with a
single event that carries the admission outcome.
"""

import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from smartsearch.config import AdmissionSettings, get_logger, get_settings
from smartsearch.core.entities.admission import AdmissionDecision
from smartsearch.core.services import resolve_client_identity

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
REJECTED_STATUSES = frozenset({403, 429})


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


class LoggingMiddleware(BaseHTTPMiddleware):
    """Request context binding, timing headers and one outcome event per request."""

    def __init__(self, app: ASGIApp, settings: AdmissionSettings | None = None):
        super().__init__(app)
        self._header_chain = (settings or get_settings().admission).client_ip_headers

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        client_id = resolve_client_identity(
            request.headers,
            request.client.host if request.client else None,
            self._header_chain,
        )
        request.state.request_id = request_id
        request.state.client_id = client_id
        structlog.contextvars.bind_contextvars(request_id=request_id, client_id=client_id)

        start = time.perf_counter()
        logger.debug("request_started", method=request.method, path=request.url.path)

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "request_failed",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    duration_ms=elapsed_ms(start),
                )
                raise

            duration_ms = elapsed_ms(start)
            fields = outcome_fields(request, response, duration_ms)
            if response.status_code in REJECTED_STATUSES:
                logger.warning("request_rejected", **fields)
            else:
                logger.info("request_completed", **fields)

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "client_id")


def elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def outcome_fields(request: Request, response: Response, duration_ms: float) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "duration_ms": duration_ms,
    }
    decision: AdmissionDecision | None = getattr(request.state, "admission", None)
    if decision is not None:
        fields["admission"] = decision.outcome.value
        if decision.remaining_tokens is not None:
            fields["remaining_tokens"] = decision.remaining_tokens
        if decision.retry_after is not None:
            fields["retry_after"] = decision.retry_after
    return fields
