"""Parser for Python pyproject.toml dependency tables."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import structlog

from dephealth.engines.dependency_scanner.models import DependencyDeclaration, DependencyRole
from dephealth.engines.dependency_scanner.parsers._sections import match_entry, section_lines
from dephealth.engines.dependency_scanner.parsers.pip_requirements import parse_requirement
from dephealth.engines.dependency_scanner.registry import register_parser

log = structlog.get_logger("dephealth.engine")

# Searched in order; later sections overwrite earlier ones for the same name.
_SECTIONS: tuple[tuple[str, DependencyRole], ...] = (
    ("dependencies", DependencyRole.DEPENDENCY),
    ("project.dependencies", DependencyRole.DEPENDENCY),
    ("tool.poetry.dependencies", DependencyRole.DEPENDENCY),
    ("tool.poetry.dev-dependencies", DependencyRole.DEV),
    ("tool.poetry.group.dev.dependencies", DependencyRole.DEV),
)

# PEP 508 simplified: name, optional extras, version specifiers
_PEP508_RE = re.compile(
    r"^([A-Za-z0-9]([A-Za-z0-9._-]*[A-Za-z0-9])?)"  # package name
    r"(\[[^\]]*\])?"  # optional extras [extra1,extra2]
    r"\s*"
    r"(.*)?$",  # version specifiers
)


def _lookup(data: dict[str, Any], dotted: str) -> Any:
    node: Any = data
    for key in dotted.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def _table_version(spec: Any) -> str | None:
    """Extract the version from ``"1.0"`` or ``{ version = "1.0", ... }``."""
    if isinstance(spec, str):
        return spec
    if isinstance(spec, dict) and isinstance(spec.get("version"), str):
        return spec["version"]
    return None


def _pep508(raw: str, role: DependencyRole, source_file: str) -> DependencyDeclaration | None:
    line = raw.split(";", 1)[0].strip()
    m = _PEP508_RE.match(line)
    if not m:
        return None
    spec = re.sub(r"\s+", "", m.group(4) or "")
    dep = parse_requirement(m.group(1) + spec, source_file)
    if dep is None:
        return None
    return DependencyDeclaration(
        name=dep.name,
        declared_version=dep.declared_version,
        constraint_operator=dep.constraint_operator,
        role=role,
        source_file=source_file,
    )


class PyprojectTomlParser:
    format_name = "pyproject-toml"
    file_patterns = ["pyproject.toml"]

    def parse(self, file_path: Path, content: str) -> list[DependencyDeclaration]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            log.debug("pyproject.invalid_toml", file=file_path.name, error=str(exc))
            return self._parse_lines(file_path.name, content)
        return self._parse_document(file_path.name, data)

    def _parse_document(self, source_file: str, data: dict[str, Any]) -> list[DependencyDeclaration]:
        deps: list[DependencyDeclaration] = []

        for section, role in _SECTIONS:
            node = _lookup(data, section)
            if isinstance(node, list):
                # PEP 621: [project] dependencies = ["name>=1.0", ...]
                for raw in node:
                    if not isinstance(raw, str):
                        continue
                    dep = _pep508(raw, role, source_file)
                    if dep is not None:
                        deps.append(dep)
            elif isinstance(node, dict):
                for name, spec in node.items():
                    version = _table_version(spec)
                    if version is None:
                        continue
                    deps.append(
                        DependencyDeclaration(
                            name=name,
                            declared_version=version,
                            constraint_operator="==",
                            role=role,
                            source_file=source_file,
                        )
                    )

        return deps

    def _parse_lines(self, source_file: str, content: str) -> list[DependencyDeclaration]:
        """Best-effort fallback for documents tomllib cannot load."""
        deps: list[DependencyDeclaration] = []

        for section, role in _SECTIONS:
            for line in section_lines(content, section) or []:
                entry = match_entry(line, allow_table=True)
                if entry is None:
                    continue
                name, version = entry
                deps.append(
                    DependencyDeclaration(
                        name=name,
                        declared_version=version,
                        constraint_operator="==",
                        role=role,
                        source_file=source_file,
                    )
                )

        return deps


register_parser(PyprojectTomlParser())
