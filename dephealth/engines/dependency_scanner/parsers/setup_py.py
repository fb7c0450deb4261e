"""Parser for setuptools ``setup.py`` install_requires lists."""

from __future__ import annotations

import re
from pathlib import Path

from dephealth.engines.dependency_scanner.models import DependencyDeclaration
from dephealth.engines.dependency_scanner.parsers.pip_requirements import parse_requirement
from dephealth.engines.dependency_scanner.registry import register_parser

_INSTALL_REQUIRES_RE = re.compile(r"install_requires\s*=\s*\[([\s\S]*?)\]")


class SetupPyParser:
    format_name = "setup-py"
    file_patterns = ["setup.py"]

    def parse(self, file_path: Path, content: str) -> list[DependencyDeclaration]:
        m = _INSTALL_REQUIRES_RE.search(content)
        if not m:
            return []

        deps: list[DependencyDeclaration] = []
        for raw in m.group(1).split(","):
            entry = raw.strip()
            if not entry or entry.startswith("#"):
                continue
            entry = entry.replace('"', "").replace("'", "").strip()
            if not entry:
                continue

            dep = parse_requirement(entry, file_path.name)
            if dep is not None:
                deps.append(dep)

        return deps


register_parser(SetupPyParser())
