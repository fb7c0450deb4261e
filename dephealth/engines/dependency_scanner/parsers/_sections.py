"""Section-scoped line search for TOML-like manifests.

Used where a manifest is read line by line instead of through a TOML parser:
Pipfiles, and pyproject files that ``tomllib`` rejects.
"""

from __future__ import annotations

import re

# name = "version"
SIMPLE_ENTRY_RE = re.compile(r'^([A-Za-z0-9_.-]+)\s*=\s*"([^"]+)"')

# name = { version = "version", ... }
TABLE_ENTRY_RE = re.compile(r'^([A-Za-z0-9_.-]+)\s*=\s*\{\s*version\s*=\s*"([^"]+)"')

_HEADER_RE = re.compile(r"^\[\[?\s*([^\]]+?)\s*\]\]?\s*(#.*)?$")


def section_lines(content: str, section: str) -> list[str] | None:
    """Return the stripped body lines of ``[section]``, or None if absent.

    The body ends at the next table header. Blank lines and ``#`` comments are
    dropped.
    """
    body: list[str] | None = None
    for raw in content.splitlines():
        line = raw.strip()
        header = _HEADER_RE.match(line)
        if header:
            if body is not None:
                break
            if header.group(1) == section:
                body = []
            continue
        if body is not None and line and not line.startswith("#"):
            body.append(line)
    return body


def match_entry(line: str, *, allow_table: bool) -> tuple[str, str] | None:
    """Match a ``name = "version"`` (or inline-table) line to (name, version)."""
    m = SIMPLE_ENTRY_RE.match(line)
    if m:
        return m.group(1), m.group(2)
    if allow_table:
        m = TABLE_ENTRY_RE.match(line)
        if m:
            return m.group(1), m.group(2)
    return None
