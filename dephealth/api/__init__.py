"""dephealth REST API: FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dephealth import __version__
from dephealth.api.deps import get_settings
from dephealth.api.errors import register_error_handlers
from dephealth.api.middleware.request_id import RequestIDMiddleware
from dephealth.api.routers import analyze
from dephealth.core.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    setup_logging()
    settings = get_settings()

    app = FastAPI(
        title="dephealth",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    register_error_handlers(app)

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(analyze.router, prefix="/api", tags=["analysis"])

    return app
