"""Data models for the repository activity scorer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GitHistoryStats:
    """Raw commit-history figures read from a clone."""

    last_commit_date: datetime
    recent_commit_count: int
    total_commit_count: int
    contributor_count: int


@dataclass(frozen=True)
class RepositoryActivity:
    """Maintenance activity of a remote repository, or the reason it is missing."""

    last_commit_date: datetime | None = None
    recent_commit_count: int = 0
    total_commit_count: int = 0
    contributor_count: int = 0
    activity_score: int = 0
    is_active: bool = False
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> RepositoryActivity:
        return cls(error=error, is_active=False, activity_score=0)

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"error": self.error, "isActive": False, "activityScore": 0}
        return {
            "lastCommitDate": self.last_commit_date.isoformat() if self.last_commit_date else None,
            "recentCommitCount": self.recent_commit_count,
            "totalCommitCount": self.total_commit_count,
            "contributorCount": self.contributor_count,
            "activityScore": self.activity_score,
            "isActive": self.is_active,
        }
