"""Parser for pip requirements files."""

from __future__ import annotations

import re
from pathlib import Path

from dephealth.engines.dependency_scanner.models import (
    UNKNOWN_VERSION,
    DependencyDeclaration,
    DependencyRole,
)
from dephealth.engines.dependency_scanner.registry import register_parser

# Matches: name, operator run, version (anything after the version is ignored)
REQUIREMENT_RE = re.compile(r"^([A-Za-z0-9_.-]+)([<>=~!]+)([A-Za-z0-9_.*+-]+)")

BARE_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def parse_requirement(entry: str, source_file: str) -> DependencyDeclaration | None:
    """Parse one ``name<op><version>`` or bare ``name`` requirement.

    Returns None for anything else (options, URLs, extras, markers).
    """
    m = REQUIREMENT_RE.match(entry)
    if m:
        return DependencyDeclaration(
            name=m.group(1),
            declared_version=m.group(3),
            constraint_operator=m.group(2),
            role=DependencyRole.DEPENDENCY,
            source_file=source_file,
        )
    if BARE_NAME_RE.match(entry):
        return DependencyDeclaration(
            name=entry,
            declared_version=UNKNOWN_VERSION,
            constraint_operator="==",
            role=DependencyRole.DEPENDENCY,
            source_file=source_file,
        )
    return None


class PipRequirementsParser:
    format_name = "pip-requirements"
    file_patterns = [
        "requirements.txt",
        "requirements/*",
        "deps/*",
        "dependencies/*",
    ]

    def parse(self, file_path: Path, content: str) -> list[DependencyDeclaration]:
        deps: list[DependencyDeclaration] = []
        rel_path = file_path.name

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            dep = parse_requirement(line, rel_path)
            if dep is not None:
                deps.append(dep)

        return deps


register_parser(PipRequirementsParser())
