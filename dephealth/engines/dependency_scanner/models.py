"""Data models for the dependency scanner engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Ecosystem(str, Enum):
    """Supported package-manager families."""

    NPM = "npm"
    PIP = "pip"


class DependencyRole(str, Enum):
    DEPENDENCY = "dependency"
    DEV = "devDependency"


UNKNOWN_VERSION = "unknown"


@dataclass(frozen=True)
class DependencyDeclaration:
    """A single dependency declared in a manifest file."""

    name: str
    declared_version: str
    constraint_operator: str
    role: DependencyRole = DependencyRole.DEPENDENCY
    source_file: str = ""

    @property
    def has_concrete_version(self) -> bool:
        return bool(self.declared_version) and self.declared_version != UNKNOWN_VERSION

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "declaredVersion": self.declared_version,
            "constraintOperator": self.constraint_operator,
            "role": self.role.value,
            "sourceFile": self.source_file,
        }
