"""Analyze router."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dephealth.api.deps import get_analyzer
from dephealth.api.errors import BadRequestError
from dephealth.api.schemas.analysis import AnalysisResponse, AnalyzeRequest, ErrorResponse
from dephealth.engines.analysis.analyzer import DependencyHealthAnalyzer

log = structlog.get_logger("dephealth.api")

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}},
)
async def analyze(
    body: AnalyzeRequest,
    analyzer: DependencyHealthAnalyzer = Depends(get_analyzer),
) -> JSONResponse:
    """Run one dependency health analysis.

    Analysis failures are reported in the body's ``error`` field with a 200
    status; only a missing ``projectPath`` is a client error.
    """
    if not body.project_path or not body.project_path.strip():
        raise BadRequestError("Project path is required")

    result = await analyzer.analyze(body.project_path.strip(), body.ecosystem or "auto")
    return JSONResponse(result.to_dict())
