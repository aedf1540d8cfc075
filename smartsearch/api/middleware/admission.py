"""
Admission control middleware.

Rejects blacklisted clients with 403 and clients whose token bucket is
empty with 429, before the request reaches any route.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from smartsearch.api.middleware.error_handler import error_response
from smartsearch.config import AdmissionSettings, get_logger, get_settings
from smartsearch.core.entities.admission import AdmissionOutcome
from smartsearch.core.services import AdmissionController, resolve_client_identity

logger = get_logger(__name__)


class AdmissionMiddleware(BaseHTTPMiddleware):
    """
    Blacklist and token-bucket gate.

    The controller is resolved lazily so tests can swap the store through
    the service factories.
    """

    def __init__(
        self,
        app: ASGIApp,
        controller: AdmissionController | None = None,
        settings: AdmissionSettings | None = None,
    ):
        super().__init__(app)
        self._controller = controller
        self._settings = settings or get_settings().admission

    def _get_controller(self) -> AdmissionController:
        if self._controller is None:
            from smartsearch.application.services import get_admission_controller

            self._controller = get_admission_controller()
        return self._controller

    def is_exempt(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self._settings.exempt_paths
        )

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if not self._settings.enabled or self.is_exempt(request.url.path):
            return await call_next(request)

        client_id = getattr(request.state, "client_id", None) or resolve_client_identity(
            request.headers,
            request.client.host if request.client else None,
            self._settings.client_ip_headers,
        )
        decision = await self._get_controller().admit(client_id)
        request.state.admission = decision

        if decision.outcome == AdmissionOutcome.BLACKLISTED:
            return error_response(
                request,
                status.HTTP_403_FORBIDDEN,
                "CLIENT_BLACKLISTED",
                "Access temporarily blocked due to excessive requests",
                headers={"Retry-After": str(decision.retry_after)},
            )

        if decision.outcome == AdmissionOutcome.RATE_LIMITED:
            return error_response(
                request,
                status.HTTP_429_TOO_MANY_REQUESTS,
                "RATE_LIMITED",
                "Rate limit exceeded",
                headers={"Retry-After": str(decision.retry_after)},
            )

        response = await call_next(request)
        if decision.remaining_tokens is not None:
            response.headers["X-RateLimit-Remaining"] = str(decision.remaining_tokens)
        return response
