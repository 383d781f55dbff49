"""Exception handlers — translate errors into {"message": ...} responses.

Learn: Domain errors carry their own status code and a client-safe
message. Request-body validation failures are reported as 400 (not
FastAPI's default 422) to match the API contract. Anything else is a
bug or an outage: log it with the traceback, tell the client nothing.
RequestIdMiddleware calls handle_unexpected_error for those, so the
500 still carries X-Request-ID.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from voyagehub.errors import ValidationError, VoyageHubError

logger = structlog.get_logger()


def _describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or ValidationError.message


async def handle_domain_error(request: Request, exc: VoyageHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "voyagehub.request.failed",
            path=request.url.path,
            error_type=type(exc).__name__,
        )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"message": _describe(exc)},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("voyagehub.request.unhandled", path=request.url.path)
    return JSONResponse(status_code=500, content={"message": VoyageHubError.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VoyageHubError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
