"""Parser for npm package.json manifests."""

from __future__ import annotations

import json
import re
from pathlib import Path

import structlog

from dephealth.engines.dependency_scanner.models import DependencyDeclaration, DependencyRole
from dephealth.engines.dependency_scanner.registry import register_parser

log = structlog.get_logger("dephealth.engine")

# Leading semver range operator: ^1.0, ~1.0, >=1.0, <2, =1.0
_RANGE_OP_RE = re.compile(r"^\s*(\^|~|>=|<=|>|<|=)?\s*(.*)$")


def split_range(spec: str) -> tuple[str, str]:
    """Split an npm range into (operator, remainder); operator may be empty."""
    m = _RANGE_OP_RE.match(spec)
    if not m:
        return "", spec
    return m.group(1) or "", m.group(2)


class NpmPackageJsonParser:
    format_name = "npm-package-json"
    file_patterns = ["package.json"]

    def parse(self, file_path: Path, content: str) -> list[DependencyDeclaration]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            log.warning("package_json.invalid", file=file_path.name, error=str(exc))
            return []
        if not isinstance(data, dict):
            return []

        direct = data.get("dependencies") or {}
        dev = data.get("devDependencies") or {}
        if not isinstance(direct, dict):
            direct = {}
        if not isinstance(dev, dict):
            dev = {}

        merged = {**direct, **dev}
        deps: list[DependencyDeclaration] = []
        for name, spec in merged.items():
            declared = spec if isinstance(spec, str) else str(spec)
            operator, _ = split_range(declared)
            role = DependencyRole.DEPENDENCY if name in direct else DependencyRole.DEV
            deps.append(
                DependencyDeclaration(
                    name=name,
                    declared_version=declared,
                    constraint_operator=operator,
                    role=role,
                    source_file=file_path.name,
                )
            )

        return deps


register_parser(NpmPackageJsonParser())
