"""Aggregate result of one analysis run."""

from __future__ import annotations

from dataclasses import dataclass, field

from dephealth.engines.activity_scorer.models import RepositoryActivity
from dephealth.engines.dependency_scanner.models import Ecosystem
from dephealth.engines.outdated_resolver.models import OutdatedEntry
from dephealth.engines.usage_classifier.models import UsageRecord
from dephealth.engines.vuln_aggregator.models import Vulnerability


@dataclass
class AnalysisResult:
    """Everything the engine learned about a project, or why it could not.

    When ``error`` is set every collection is empty and ``activity`` is None.
    """

    outdated: list[OutdatedEntry] = field(default_factory=list)
    vulnerabilities: list[Vulnerability] = field(default_factory=list)
    usage: list[UsageRecord] = field(default_factory=list)
    activity: RepositoryActivity | None = None
    detected_files: list[str] = field(default_factory=list)
    ecosystem: Ecosystem | None = None
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> AnalysisResult:
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data: dict = {
            "outdated": [e.to_dict() for e in self.outdated],
            "vulnerabilities": [v.to_dict() for v in self.vulnerabilities],
            "usage": [u.to_dict() for u in self.usage],
            "activity": self.activity.to_dict() if self.activity is not None else None,
            "detectedFiles": list(self.detected_files),
            "ecosystem": self.ecosystem.value if self.ecosystem is not None else None,
        }
        if self.error is not None:
            data["error"] = self.error
        return data
