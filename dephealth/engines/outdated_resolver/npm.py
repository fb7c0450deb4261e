"""``npm outdated`` invocation and output parsing."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from dephealth.core.process import CommandError, run_command
from dephealth.engines.dependency_scanner.models import DependencyDeclaration, DependencyRole
from dephealth.engines.outdated_resolver.models import OutdatedEntry, VersionLookup

log = structlog.get_logger("dephealth.engine")

# npm outdated exits 1 when it found outdated packages
_DATA_EXIT_CODES = (0, 1)


def is_npm_error(payload: Mapping[str, Any]) -> bool:
    """npm reports failures as a JSON object with an ``error.code`` member."""
    error = payload.get("error")
    return isinstance(error, dict) and "code" in error


def parse_npm_outdated(
    payload: Mapping[str, Any],
    declarations: Mapping[str, DependencyDeclaration],
) -> list[OutdatedEntry]:
    """Map ``npm outdated --json`` output to entries tagged with manifest roles."""
    entries: list[OutdatedEntry] = []
    for name, info in payload.items():
        if not isinstance(info, dict):
            continue
        declared = declarations.get(name)
        role = declared.role if declared is not None else DependencyRole.DEV
        entries.append(
            OutdatedEntry(
                name=name,
                current=VersionLookup.from_declared(info.get("current")),
                wanted=VersionLookup.from_declared(info.get("wanted")),
                latest=VersionLookup.from_declared(info.get("latest")),
                role=role,
            )
        )
    return entries


async def npm_outdated(
    project_path: Path,
    declarations: Mapping[str, DependencyDeclaration],
    *,
    npm_bin: str = "npm",
    timeout: float | None = None,
) -> list[OutdatedEntry]:
    """Run ``npm outdated --json``; any failure degrades to an empty list."""
    try:
        result = await run_command(
            [npm_bin, "outdated", "--json"], cwd=project_path, timeout=timeout
        )
    except CommandError as exc:
        log.warning("outdated.npm_failed", path=str(project_path), error=str(exc))
        return []

    if result.returncode not in _DATA_EXIT_CODES:
        log.warning(
            "outdated.npm_failed",
            path=str(project_path),
            exit_code=result.returncode,
            stderr=result.stderr.strip()[:500],
        )
        return []

    if not result.stdout.strip():
        return []
    try:
        payload = json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        log.warning("outdated.npm_bad_output", path=str(project_path), error=str(exc))
        return []
    if not isinstance(payload, dict) or is_npm_error(payload):
        log.warning("outdated.npm_bad_output", path=str(project_path), error="unexpected payload")
        return []

    return parse_npm_outdated(payload, declarations)
