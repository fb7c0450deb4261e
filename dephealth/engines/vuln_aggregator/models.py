"""Data models for the vulnerability aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class VulnerabilityFix:
    """A concrete upgrade that resolves an advisory."""

    target_version: str
    name: str | None = None
    is_semver_major: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "targetVersion": self.target_version,
            "isSemVerMajor": self.is_semver_major,
        }


FixAvailability = Union[None, bool, VulnerabilityFix]


@dataclass
class Vulnerability:
    """One advisory entry, as reported by the audit tool."""

    name: str
    severity: str
    affected_range: str = ""
    affected_nodes: list[str] = field(default_factory=list)
    upstream_causes: list[Any] = field(default_factory=list)  # package names or advisory dicts
    downstream_effects: list[str] = field(default_factory=list)
    fix: FixAvailability = None

    def to_dict(self) -> dict:
        fix: Any = self.fix
        if isinstance(fix, VulnerabilityFix):
            fix = fix.to_dict()
        return {
            "name": self.name,
            "severity": self.severity,
            "affectedRange": self.affected_range,
            "affectedNodes": list(self.affected_nodes),
            "upstreamCauses": list(self.upstream_causes),
            "downstreamEffects": list(self.downstream_effects),
            "fix": fix,
        }
