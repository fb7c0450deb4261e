"""Parser registry: match manifest files to the parser for their format."""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import Protocol, runtime_checkable

from dephealth.engines.dependency_scanner.models import DependencyDeclaration


@runtime_checkable
class ManifestParser(Protocol):
    """Interface that every manifest parser must satisfy."""

    format_name: str
    file_patterns: list[str]

    def parse(self, file_path: Path, content: str) -> list[DependencyDeclaration]: ...


PARSER_REGISTRY: dict[str, ManifestParser] = {}


def register_parser(parser: ManifestParser) -> None:
    """Register a parser instance by its format_name."""
    PARSER_REGISTRY[parser.format_name] = parser


def parser_for(relative_path: str) -> ManifestParser | None:
    """Return the parser whose patterns match *relative_path*, if any.

    Patterns are matched against the POSIX form of the path relative to the
    project root, e.g. ``requirements.txt`` or ``requirements/dev.txt``.
    """
    posix = Path(relative_path).as_posix()
    for parser in PARSER_REGISTRY.values():
        for pattern in parser.file_patterns:
            if fnmatchcase(posix, pattern):
                return parser
    return None
