"""DependencyHealthAnalyzer: one pass from project location to AnalysisResult."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from pathlib import Path
from typing import TypeVar

import structlog

from dephealth.core.config import Settings
from dephealth.core.github import (
    is_github_reference,
    normalize_github_reference,
    parse_repo_reference,
)
from dephealth.core.workspace import ephemeral_workspace
from dephealth.engines.activity_scorer.models import RepositoryActivity
from dephealth.engines.activity_scorer.scorer import ActivityScorer
from dephealth.engines.analysis.models import AnalysisResult
from dephealth.engines.dependency_scanner.locator import locate_manifests, resolve_ecosystem
from dephealth.engines.dependency_scanner.models import Ecosystem
from dephealth.engines.dependency_scanner.repo import clone_repository
from dephealth.engines.dependency_scanner.scanner import extract_dependencies
from dephealth.engines.outdated_resolver.pypi_client import PyPIClient
from dephealth.engines.outdated_resolver.resolver import OutdatedResolver
from dephealth.engines.usage_classifier.classifier import classify_usage
from dephealth.engines.vuln_aggregator.audit import VulnerabilityAggregator
from dephealth.exceptions import AnalysisError, PathNotFound

log = structlog.get_logger("dephealth.engine")

T = TypeVar("T")


class DependencyHealthAnalyzer:
    """Compose detection, extraction, resolution, audit, usage and activity.

    Only ``AnalysisError`` aborts a run; every later step degrades to an
    empty value on failure.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        pypi: PyPIClient | None = None,
    ) -> None:
        self._settings = settings or Settings.from_env()
        self._outdated = OutdatedResolver(self._settings, pypi=pypi)
        self._vulns = VulnerabilityAggregator(
            npm_bin=self._settings.npm_bin, timeout=self._settings.command_timeout
        )
        self._activity = ActivityScorer(self._settings)

    async def analyze(self, location: str, ecosystem: str | Ecosystem = "auto") -> AnalysisResult:
        """Analyze a local path or a GitHub reference. Never raises."""
        log.info("analysis.started", location=location, ecosystem=str(ecosystem))
        try:
            if is_github_reference(location):
                result = await self._analyze_remote(location, ecosystem)
            else:
                result = await self._analyze_local(Path(location), ecosystem, location)
        except AnalysisError as exc:
            log.warning("analysis.failed", location=location, error=str(exc))
            return AnalysisResult.failure(str(exc))
        except Exception as exc:
            log.exception("analysis.crashed", location=location)
            return AnalysisResult.failure(str(exc) or type(exc).__name__)

        log.info(
            "analysis.completed",
            location=location,
            ecosystem=result.ecosystem.value if result.ecosystem else None,
            outdated=sum(1 for e in result.outdated if e.is_outdated),
            vulnerabilities=len(result.vulnerabilities),
        )
        return result

    async def _analyze_remote(self, reference: str, ecosystem: str | Ecosystem) -> AnalysisResult:
        parse_repo_reference(reference)
        url = normalize_github_reference(reference)

        async with ephemeral_workspace() as workdir:
            clone_path = await clone_repository(
                url,
                workdir,
                git_bin=self._settings.git_bin,
                timeout=self._settings.clone_timeout,
            )
            result = await self._run_pipeline(clone_path, ecosystem)
            # The clone above is of the same reference, so it is scored in place.
            result.activity = await self._score_activity(clone_path)
            return result

    async def _analyze_local(
        self, root: Path, ecosystem: str | Ecosystem, location: str
    ) -> AnalysisResult:
        if not root.exists():
            raise PathNotFound(location)
        return await self._run_pipeline(root, ecosystem)

    async def _run_pipeline(self, root: Path, hint: str | Ecosystem) -> AnalysisResult:
        ecosystem = resolve_ecosystem(root, hint)
        detected_files = locate_manifests(root, ecosystem)
        declarations = extract_dependencies(root, detected_files)
        log.debug(
            "analysis.dependencies_extracted",
            ecosystem=ecosystem.value,
            files=detected_files,
            count=len(declarations),
        )

        outdated = await _degrade(
            "outdated", root, self._outdated.resolve(root, ecosystem, declarations)
        )
        vulnerabilities = await _degrade("audit", root, self._vulns.collect(root, ecosystem))
        usage = await _degrade(
            "usage",
            root,
            asyncio.to_thread(classify_usage, root, list(declarations), ecosystem),
        )

        return AnalysisResult(
            outdated=outdated,
            vulnerabilities=vulnerabilities,
            usage=usage,
            detected_files=detected_files,
            ecosystem=ecosystem,
        )

    async def _score_activity(self, clone_path: Path) -> RepositoryActivity:
        try:
            return await self._activity.score_clone(clone_path)
        except Exception as exc:
            log.exception("activity.failed", path=str(clone_path))
            return RepositoryActivity.failed(str(exc) or type(exc).__name__)


async def _degrade(step: str, root: Path, pending: Awaitable[list[T]]) -> list[T]:
    """Await one best-effort step; an unexpected failure empties its field."""
    try:
        return await pending
    except Exception:
        log.exception(f"{step}.failed", path=str(root))
        return []


async def analyze_dependencies(
    location: str,
    ecosystem: str | Ecosystem = "auto",
    *,
    settings: Settings | None = None,
) -> AnalysisResult:
    """Convenience wrapper: analyze *location* with default collaborators."""
    return await DependencyHealthAnalyzer(settings).analyze(location, ecosystem)
