"""Data models for the outdated resolver engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dephealth.engines.dependency_scanner.models import (
    UNKNOWN_VERSION,
    DependencyRole,
)

NOT_FOUND_VERSION = "not found"


class LookupStatus(str, Enum):
    RESOLVED = "resolved"
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class VersionLookup:
    """Outcome of resolving a version: a concrete value, unavailable, or not found.

    Only a RESOLVED lookup carries a version; comparisons never see the
    ``"unknown"`` / ``"not found"`` display strings.
    """

    status: LookupStatus
    version: str | None = None

    @classmethod
    def resolved(cls, version: str) -> VersionLookup:
        return cls(LookupStatus.RESOLVED, version)

    @classmethod
    def unavailable(cls) -> VersionLookup:
        return cls(LookupStatus.UNAVAILABLE)

    @classmethod
    def not_found(cls) -> VersionLookup:
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def from_declared(cls, version: str | None) -> VersionLookup:
        """Map a declared or reported version; missing or ``unknown`` is unavailable."""
        if not version or version == UNKNOWN_VERSION:
            return cls.unavailable()
        return cls.resolved(version)

    @property
    def is_concrete(self) -> bool:
        return self.status is LookupStatus.RESOLVED

    def display(self) -> str:
        if self.status is LookupStatus.RESOLVED:
            return self.version or ""
        if self.status is LookupStatus.NOT_FOUND:
            return NOT_FOUND_VERSION
        return UNKNOWN_VERSION


@dataclass(frozen=True)
class OutdatedEntry:
    """Current / wanted / latest versions of one dependency."""

    name: str
    current: VersionLookup
    wanted: VersionLookup
    latest: VersionLookup
    role: DependencyRole = DependencyRole.DEPENDENCY

    @property
    def is_outdated(self) -> bool:
        # Exact string comparison; no semantic version ordering.
        return (
            self.current.is_concrete
            and self.latest.is_concrete
            and self.current.version != self.latest.version
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "current": self.current.display(),
            "wanted": self.wanted.display(),
            "latest": self.latest.display(),
            "role": self.role.value,
            "isOutdated": self.is_outdated,
        }
