"""Request / response schemas for the analyze endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """Body of ``POST /api/analyze``."""

    model_config = ConfigDict(populate_by_name=True)

    project_path: str | None = Field(None, alias="projectPath")
    ecosystem: str | None = None


class ErrorResponse(BaseModel):
    error: str


class AnalysisResponse(BaseModel):
    """Serialized AnalysisResult; ``error`` is present only on failure."""

    model_config = ConfigDict(populate_by_name=True)

    outdated: list[dict[str, Any]]
    vulnerabilities: list[dict[str, Any]]
    usage: list[dict[str, Any]]
    activity: dict[str, Any] | None = None
    detected_files: list[str] = Field(alias="detectedFiles")
    ecosystem: str | None = None
    error: str | None = None
