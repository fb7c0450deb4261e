"""Unified error handling: client errors and validation errors → JSON."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = structlog.get_logger("dephealth.api")


class BadRequestError(Exception):
    """Malformed request (-> HTTP 400)."""


async def _bad_request_handler(_request: Request, exc: BadRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return JSONResponse(status_code=400, content={"error": "; ".join(messages)})


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    log.error("api.unhandled_error", error=str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(BadRequestError, _bad_request_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
