"""Request ID + access log middleware.

Learn: Every request gets an ID, either from the incoming X-Request-ID
header (for tracing across services) or a fresh UUID. The ID is bound
to structlog's contextvars so every log line written while handling the
request carries it, and it is echoed in the response header. One
"voyagehub.request" line per request records method, path, status and
duration; bodies and Authorization headers are never logged.

An exception that escapes the app would otherwise skip this middleware
on its way to Starlette's outermost error handler, so it is turned into
the opaque 500 response here and still gets the header and the log line.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from voyagehub.api.errors import handle_unexpected_error

logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log its outcome."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            response = await handle_unexpected_error(request, exc)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "voyagehub.request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
