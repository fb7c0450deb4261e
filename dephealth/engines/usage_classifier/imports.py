"""Import / require reference extraction from Python and JavaScript sources."""

from __future__ import annotations

import ast
import os
import re
import warnings
from collections import Counter
from pathlib import Path

import structlog

log = structlog.get_logger("dephealth.engine")

# Directories to skip during scanning
SKIP_DIRS = {
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    "bower_components",
    "__pycache__",
    ".tox",
    ".nox",
    ".venv",
    "venv",
    "env",
    "site-packages",
    ".mypy_cache",
    ".pytest_cache",
    "build",
    "dist",
    ".next",
    "coverage",
    ".eggs",
}

PYTHON_EXTENSIONS = frozenset({".py"})
JS_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"})

# Line fallback for Python files that do not parse
_PY_IMPORT_LINE_RE = re.compile(r"^\s*import\s+(.+)$")
_PY_FROM_LINE_RE = re.compile(r"^\s*from\s+([A-Za-z_][\w.]*)\s+import\b")

_JS_SPECIFIER_RES = (
    # import x from 'pkg' / import {a} from "pkg" / export * from 'pkg'
    re.compile(r"""\b(?:import|export)\s[^'";]*?\bfrom\s*['"]([^'"]+)['"]"""),
    # import 'pkg'
    re.compile(r"""\bimport\s*['"]([^'"]+)['"]"""),
    # require('pkg') / import('pkg')
    re.compile(r"""\b(?:require|import)\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
)


def iter_source_files(root: Path, extensions: frozenset[str]) -> list[Path]:
    """Collect source files under *root* in a stable order, skipping vendored dirs."""
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for f in sorted(filenames):
            if Path(f).suffix.lower() in extensions:
                files.append(Path(dirpath) / f)
    return files


def python_imports(source: str) -> list[str]:
    """Top-level module names referenced by import statements, one per reference."""
    try:
        # Silence escape-sequence warnings from scanned sources
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", SyntaxWarning)
            warnings.simplefilter("ignore", DeprecationWarning)
            tree = ast.parse(source)
    except (SyntaxError, ValueError, RecursionError, MemoryError):
        # Unparsable or too deeply nested (generated or minified code)
        return _python_imports_by_line(source)

    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.extend(alias.name.split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0 and node.module:
                modules.append(node.module.split(".")[0])
    return modules


def _python_imports_by_line(source: str) -> list[str]:
    modules: list[str] = []
    for line in source.splitlines():
        m = _PY_FROM_LINE_RE.match(line)
        if m:
            modules.append(m.group(1).split(".")[0])
            continue
        m = _PY_IMPORT_LINE_RE.match(line)
        if m:
            for part in m.group(1).split(","):
                name = part.strip().split(" ")[0]
                if name and name.replace(".", "").replace("_", "").isalnum():
                    modules.append(name.split(".")[0])
    return modules


def js_package_name(specifier: str) -> str | None:
    """Package name of an import specifier; None for relative, absolute or builtin."""
    if not specifier or specifier.startswith((".", "/", "node:")) or ":" in specifier:
        return None
    parts = specifier.split("/")
    if specifier.startswith("@"):
        if len(parts) < 2 or not parts[1]:
            return None
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def js_imports(source: str) -> list[str]:
    """Package names referenced by import/require/export-from, one per reference."""
    packages: list[str] = []
    for pattern in _JS_SPECIFIER_RES:
        for m in pattern.finditer(source):
            name = js_package_name(m.group(1))
            if name is not None:
                packages.append(name)
    return packages


def count_references(root: Path, *, python: bool) -> Counter[str]:
    """Count import references across every matching source file under *root*."""
    extensions = PYTHON_EXTENSIONS if python else JS_EXTENSIONS
    extract = python_imports if python else js_imports
    counts: Counter[str] = Counter()
    for path in iter_source_files(root, extensions):
        try:
            source = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            log.debug("usage.read_failed", file=str(path), error=str(exc))
            continue
        counts.update(extract(source))
    return counts
