"""Dependency scanner engine: detect the ecosystem and extract declarations."""

from dephealth.engines.dependency_scanner.locator import (
    detect_ecosystem,
    locate_manifests,
    resolve_ecosystem,
)
from dephealth.engines.dependency_scanner.models import (
    DependencyDeclaration,
    DependencyRole,
    Ecosystem,
)
from dephealth.engines.dependency_scanner.scanner import extract_dependencies, parse_manifest

__all__ = [
    "DependencyDeclaration",
    "DependencyRole",
    "Ecosystem",
    "detect_ecosystem",
    "extract_dependencies",
    "locate_manifests",
    "parse_manifest",
    "resolve_ecosystem",
]
