"""Request context middleware for correlation IDs and request metrics."""

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from tasktrack.infrastructure.telemetry.logging import clear_request_context, set_request_context
from tasktrack.infrastructure.telemetry.metrics import record_http_request


def _route_path(request: Request) -> str:
    """Route template (e.g. /tasks/{task_id}) to keep metric labels bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that sets up request context for logging and tracing."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid4())

        set_request_context(request_id=request_id)
        request.state.request_id = request_id
        start = time.perf_counter()

        try:
            response = await call_next(request)

            response.headers["X-Request-ID"] = request_id
            record_http_request(
                method=request.method,
                endpoint=_route_path(request),
                status_code=response.status_code,
                duration_seconds=time.perf_counter() - start,
            )

            return response
        finally:
            clear_request_context()
