"""Dependency extraction across every detected manifest of a project."""

from __future__ import annotations

from pathlib import Path

import structlog

# Ensure parsers are registered before any scan runs.
import dephealth.engines.dependency_scanner.parsers  # noqa: F401
from dephealth.engines.dependency_scanner.models import DependencyDeclaration
from dephealth.engines.dependency_scanner.registry import parser_for
from dephealth.exceptions import NoDependenciesFound

log = structlog.get_logger("dephealth.engine")


def parse_manifest(root: Path, relative_path: str) -> list[DependencyDeclaration]:
    """Parse one manifest with the parser registered for its filename.

    Files without a registered parser (lockfiles, conda environments) yield
    nothing. Unreadable files are logged and yield nothing.
    """
    parser = parser_for(relative_path)
    if parser is None:
        log.debug("scanner.no_parser", file=relative_path)
        return []

    file_path = root / relative_path
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        log.warning("scanner.read_failed", file=relative_path, error=str(exc))
        return []

    deps = parser.parse(file_path, content)
    # Fix source_file to be relative to the project root
    return [
        DependencyDeclaration(
            name=d.name,
            declared_version=d.declared_version,
            constraint_operator=d.constraint_operator,
            role=d.role,
            source_file=relative_path,
        )
        for d in deps
    ]


def extract_dependencies(root: Path, files: list[str]) -> dict[str, DependencyDeclaration]:
    """Parse *files* in order into a name → declaration table.

    A later declaration of the same name replaces the earlier one.

    Raises NoDependenciesFound if no file declares anything.
    """
    declarations: dict[str, DependencyDeclaration] = {}
    for relative_path in files:
        for dep in parse_manifest(root, relative_path):
            prev = declarations.get(dep.name)
            if prev is not None:
                log.debug(
                    "scanner.dep_overwritten",
                    name=dep.name,
                    old_source=prev.source_file,
                    new_source=dep.source_file,
                )
            declarations[dep.name] = dep

    if not declarations:
        raise NoDependenciesFound()
    return declarations
