"""Manifest locator: infer the ecosystem and list dependency files."""

from __future__ import annotations

from pathlib import Path

import structlog

from dephealth.engines.dependency_scanner.models import Ecosystem
from dephealth.exceptions import NoManifestFound, UnsupportedEcosystem

log = structlog.get_logger("dephealth.engine")

NPM_SIGNATURE_FILES = ("package.json", "yarn.lock", "package-lock.json")

PIP_SIGNATURE_FILES = (
    "requirements.txt",
    "pyproject.toml",
    "setup.py",
    "Pipfile",
    "poetry.lock",
)

# Root-level Python dependency files, in parse order
PIP_DEPENDENCY_FILES = PIP_SIGNATURE_FILES + ("environment.yml", "conda.yml")

PIP_REQUIREMENTS_DIRS = ("requirements", "deps", "dependencies")

NPM_MANIFEST = "package.json"

_NO_PIP_FILES_MESSAGE = (
    "No Python dependency files found (requirements.txt, pyproject.toml, setup.py, etc.)"
)


def detect_ecosystem(root: Path) -> Ecosystem:
    """Infer the ecosystem from the immediate entries of *root*.

    npm wins when both signatures are present; with neither, npm is assumed.
    """
    try:
        names = {entry.name for entry in root.iterdir()}
    except OSError as exc:
        log.warning("locator.list_failed", path=str(root), error=str(exc))
        return Ecosystem.NPM

    if any(name in names for name in NPM_SIGNATURE_FILES):
        return Ecosystem.NPM
    if any(name in names for name in PIP_SIGNATURE_FILES):
        return Ecosystem.PIP
    log.debug("locator.no_signature", path=str(root), default=Ecosystem.NPM.value)
    return Ecosystem.NPM


def resolve_ecosystem(root: Path, hint: str | Ecosystem | None = "auto") -> Ecosystem:
    """Turn an ``npm`` / ``pip`` / ``auto`` hint into a concrete ecosystem."""
    if isinstance(hint, Ecosystem):
        return hint
    value = (hint or "auto").strip().lower()
    if value == "auto":
        return detect_ecosystem(root)
    try:
        return Ecosystem(value)
    except ValueError:
        raise UnsupportedEcosystem(str(hint)) from None


def locate_manifests(root: Path, ecosystem: Ecosystem) -> list[str]:
    """Return dependency files for *ecosystem*, relative to *root*.

    Raises NoManifestFound when there is nothing to parse.
    """
    if ecosystem is Ecosystem.NPM:
        if not (root / NPM_MANIFEST).is_file():
            raise NoManifestFound(f"{NPM_MANIFEST} not found")
        return [NPM_MANIFEST]

    detected = [name for name in PIP_DEPENDENCY_FILES if (root / name).is_file()]

    for dirname in PIP_REQUIREMENTS_DIRS:
        directory = root / dirname
        if not directory.is_dir():
            continue
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            log.warning("locator.list_failed", path=str(directory), error=str(exc))
            continue
        for entry in entries:
            if entry.is_file() and (entry.name.endswith(".txt") or "requirements" in entry.name):
                detected.append(f"{dirname}/{entry.name}")

    if not detected:
        raise NoManifestFound(_NO_PIP_FILES_MESSAGE)
    return detected
