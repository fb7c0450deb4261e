"""Parser for pipenv Pipfiles."""

from __future__ import annotations

from pathlib import Path

from dephealth.engines.dependency_scanner.models import DependencyDeclaration, DependencyRole
from dephealth.engines.dependency_scanner.parsers._sections import match_entry, section_lines
from dephealth.engines.dependency_scanner.registry import register_parser

_SECTIONS = (
    ("packages", DependencyRole.DEPENDENCY),
    ("dev-packages", DependencyRole.DEV),
)


class PipfileParser:
    format_name = "pipfile"
    file_patterns = ["Pipfile"]

    def parse(self, file_path: Path, content: str) -> list[DependencyDeclaration]:
        deps: list[DependencyDeclaration] = []

        for section, role in _SECTIONS:
            for line in section_lines(content, section) or []:
                entry = match_entry(line, allow_table=False)
                if entry is None:
                    continue
                name, version = entry
                deps.append(
                    DependencyDeclaration(
                        name=name,
                        declared_version=version,
                        constraint_operator="==",
                        role=role,
                        source_file=file_path.name,
                    )
                )

        return deps


register_parser(PipfileParser())
