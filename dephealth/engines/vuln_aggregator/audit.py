"""``npm audit`` invocation and advisory parsing."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from dephealth.core.process import CommandError, run_command
from dephealth.engines.dependency_scanner.models import Ecosystem
from dephealth.engines.outdated_resolver.npm import is_npm_error
from dephealth.engines.vuln_aggregator.models import FixAvailability, Vulnerability, VulnerabilityFix

log = structlog.get_logger("dephealth.engine")


def _parse_fix(raw: Any) -> FixAvailability:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, dict) and raw.get("version"):
        return VulnerabilityFix(
            target_version=str(raw["version"]),
            name=raw.get("name"),
            is_semver_major=bool(raw.get("isSemVerMajor", False)),
        )
    return None


def _as_list(raw: Any) -> list:
    return list(raw) if isinstance(raw, list) else []


def parse_npm_audit(payload: Mapping[str, Any]) -> list[Vulnerability]:
    """Map the ``vulnerabilities`` object of ``npm audit --json`` to records."""
    advisories = payload.get("vulnerabilities")
    if not isinstance(advisories, dict):
        return []

    vulns: list[Vulnerability] = []
    for name, info in advisories.items():
        if not isinstance(info, dict):
            continue
        vulns.append(
            Vulnerability(
                name=info.get("name") or name,
                severity=str(info.get("severity", "unknown")),
                affected_range=str(info.get("range", "")),
                affected_nodes=_as_list(info.get("nodes")),
                upstream_causes=_as_list(info.get("via")),
                downstream_effects=_as_list(info.get("effects")),
                fix=_parse_fix(info.get("fixAvailable")),
            )
        )
    return vulns


async def npm_audit(
    project_path: Path,
    *,
    npm_bin: str = "npm",
    timeout: float | None = None,
) -> list[Vulnerability]:
    """Run ``npm audit --json``; any failure degrades to an empty list.

    npm audit exits non-zero whenever advisories exist, so the exit code is
    ignored as long as stdout holds a JSON report.
    """
    try:
        result = await run_command([npm_bin, "audit", "--json"], cwd=project_path, timeout=timeout)
    except CommandError as exc:
        log.warning("audit.failed", path=str(project_path), error=str(exc))
        return []

    try:
        payload = json.loads(result.stdout) if result.stdout.strip() else None
    except json.JSONDecodeError as exc:
        log.warning("audit.bad_output", path=str(project_path), error=str(exc))
        return []
    if not isinstance(payload, dict) or is_npm_error(payload):
        log.warning(
            "audit.failed",
            path=str(project_path),
            exit_code=result.returncode,
            stderr=result.stderr.strip()[:500],
        )
        return []

    return parse_npm_audit(payload)


class VulnerabilityAggregator:
    """Collect advisories for a project from its ecosystem's audit facility."""

    def __init__(self, npm_bin: str = "npm", timeout: float | None = None) -> None:
        self._npm_bin = npm_bin
        self._timeout = timeout

    async def collect(self, project_path: Path, ecosystem: Ecosystem) -> list[Vulnerability]:
        if ecosystem is not Ecosystem.NPM:
            # No advisory source is wired for pip.
            return []
        return await npm_audit(project_path, npm_bin=self._npm_bin, timeout=self._timeout)
