"""ActivityScorer: a bounded 0-100 maintenance score from commit history."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import structlog

from dephealth.core.config import Settings
from dephealth.core.github import normalize_github_reference, parse_repo_reference
from dephealth.core.workspace import ephemeral_workspace
from dephealth.engines.activity_scorer.history import GitHistoryError, read_git_history
from dephealth.engines.activity_scorer.models import GitHistoryStats, RepositoryActivity
from dephealth.engines.dependency_scanner.repo import clone_repository
from dephealth.exceptions import AnalysisError

log = structlog.get_logger("dephealth.engine")

MAX_SCORE = 100
_COMMIT_POINTS = 5
_MAX_COMMIT_SCORE = 70

# (max days since last commit, bonus), checked in order
_RECENCY_BONUS = ((7, 30), (30, 20), (90, 10))


def recency_bonus(days_since_last_commit: int) -> int:
    for max_days, bonus in _RECENCY_BONUS:
        if days_since_last_commit <= max_days:
            return bonus
    return 0


def compute_activity_score(recent_commit_count: int, days_since_last_commit: int) -> int:
    """``min(recent * 5, 70) + recency bonus``, clamped to [0, 100]."""
    commit_score = min(max(recent_commit_count, 0) * _COMMIT_POINTS, _MAX_COMMIT_SCORE)
    score = commit_score + recency_bonus(days_since_last_commit)
    return max(0, min(score, MAX_SCORE))


def days_since(moment: datetime, now: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (now - moment).days


def build_activity(stats: GitHistoryStats, now: datetime) -> RepositoryActivity:
    score = compute_activity_score(
        stats.recent_commit_count, days_since(stats.last_commit_date, now)
    )
    return RepositoryActivity(
        last_commit_date=stats.last_commit_date,
        recent_commit_count=stats.recent_commit_count,
        total_commit_count=stats.total_commit_count,
        contributor_count=stats.contributor_count,
        activity_score=score,
        is_active=stats.recent_commit_count > 0,
    )


class ActivityScorer:
    """Score repository activity. Never raises; failures become ``error`` records."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    async def score_clone(self, clone_path: Path, now: datetime | None = None) -> RepositoryActivity:
        """Score an existing local clone."""
        now = now or datetime.now(timezone.utc)
        try:
            stats = await read_git_history(
                clone_path,
                now=now,
                git_bin=self._settings.git_bin,
                timeout=self._settings.command_timeout,
            )
        except GitHistoryError as exc:
            log.warning("activity.failed", path=str(clone_path), error=str(exc))
            return RepositoryActivity.failed(str(exc))
        activity = build_activity(stats, now)
        log.info(
            "activity.scored",
            path=str(clone_path),
            score=activity.activity_score,
            recent_commits=activity.recent_commit_count,
        )
        return activity

    async def score(self, reference: str, now: datetime | None = None) -> RepositoryActivity:
        """Clone *reference* into its own workspace and score it."""
        try:
            parse_repo_reference(reference)
        except AnalysisError as exc:
            log.warning("activity.failed", reference=reference, error=str(exc))
            return RepositoryActivity.failed(str(exc))

        url = normalize_github_reference(reference)
        async with ephemeral_workspace() as workdir:
            try:
                clone_path = await clone_repository(
                    url,
                    workdir,
                    git_bin=self._settings.git_bin,
                    timeout=self._settings.clone_timeout,
                )
            except AnalysisError as exc:
                log.warning("activity.failed", reference=reference, error=str(exc))
                return RepositoryActivity.failed(str(exc))
            return await self.score_clone(clone_path, now=now)
