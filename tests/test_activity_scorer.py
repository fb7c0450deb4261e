"""Tests for the activity scorer engine."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from dephealth.engines.activity_scorer.history import GitHistoryError, read_git_history
from dephealth.engines.activity_scorer.models import GitHistoryStats, RepositoryActivity
from dephealth.engines.activity_scorer.scorer import (
    ActivityScorer,
    build_activity,
    compute_activity_score,
    recency_bonus,
)
from dephealth.exceptions import CloneFailed

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


# ── Score formula ────────────────────────────────────────────────────────


class TestComputeActivityScore:
    @pytest.mark.parametrize(
        ("recent", "days", "expected"),
        [
            (0, 100, 0),
            (14, 3, 100),
            (2, 45, 20),
            (20, 1, 100),
            (1, 7, 35),
            (1, 8, 25),
            (1, 30, 25),
            (1, 31, 15),
            (1, 90, 15),
            (1, 91, 5),
            (0, 0, 30),
        ],
    )
    def test_table(self, recent, days, expected):
        assert compute_activity_score(recent, days) == expected

    def test_bounded(self):
        for recent in (0, 1, 13, 14, 1000):
            for days in (0, 7, 30, 90, 5000):
                assert 0 <= compute_activity_score(recent, days) <= 100

    def test_recency_bonus(self):
        assert [recency_bonus(d) for d in (0, 7, 8, 30, 31, 90, 91)] == [30, 30, 20, 20, 10, 10, 0]


class TestBuildActivity:
    def test_active(self):
        stats = GitHistoryStats(
            last_commit_date=NOW - timedelta(days=3),
            recent_commit_count=14,
            total_commit_count=500,
            contributor_count=12,
        )
        activity = build_activity(stats, NOW)
        assert activity.activity_score == 100
        assert activity.is_active is True
        assert activity.to_dict() == {
            "lastCommitDate": (NOW - timedelta(days=3)).isoformat(),
            "recentCommitCount": 14,
            "totalCommitCount": 500,
            "contributorCount": 12,
            "activityScore": 100,
            "isActive": True,
        }

    def test_dormant(self):
        stats = GitHistoryStats(
            last_commit_date=NOW - timedelta(days=100),
            recent_commit_count=0,
            total_commit_count=40,
            contributor_count=1,
        )
        activity = build_activity(stats, NOW)
        assert activity.activity_score == 0
        assert activity.is_active is False

    def test_failed_record(self):
        assert RepositoryActivity.failed("boom").to_dict() == {
            "error": "boom",
            "isActive": False,
            "activityScore": 0,
        }


# ── Git history ──────────────────────────────────────────────────────────


class TestReadGitHistory:
    @pytest.mark.asyncio
    async def test_stats(self, git_repo):
        repo = git_repo(
            [
                ("Alice", NOW - timedelta(days=40)),
                ("Bob", NOW - timedelta(days=10)),
                ("Alice", NOW - timedelta(days=2)),
            ]
        )
        stats = await read_git_history(repo, now=NOW)
        assert stats.recent_commit_count == 2
        assert stats.total_commit_count == 3
        assert stats.contributor_count == 2
        assert stats.last_commit_date == NOW - timedelta(days=2)

    @pytest.mark.asyncio
    async def test_empty_repository(self, git_repo):
        repo = git_repo([])
        with pytest.raises(GitHistoryError):
            await read_git_history(repo, now=NOW)

    @pytest.mark.asyncio
    async def test_score_clone(self, git_repo, settings):
        repo = git_repo([("Alice", NOW - timedelta(days=2)), ("Bob", NOW - timedelta(days=1))])
        activity = await ActivityScorer(settings).score_clone(repo, now=NOW)
        assert activity.error is None
        assert activity.activity_score == 40
        assert activity.contributor_count == 2

    @pytest.mark.asyncio
    async def test_score_clone_not_a_repository(self, tmp_path, settings):
        activity = await ActivityScorer(settings).score_clone(tmp_path, now=NOW)
        assert activity.error
        assert activity.activity_score == 0
        assert activity.is_active is False


# ── Remote scoring ───────────────────────────────────────────────────────


class TestScoreReference:
    @pytest.mark.asyncio
    async def test_invalid_reference(self, settings):
        activity = await ActivityScorer(settings).score("https://github.com/only-owner")
        assert activity.error == "Invalid GitHub URL format"
        assert activity.activity_score == 0

    @pytest.mark.asyncio
    async def test_clone_failure_is_recorded(self, settings):
        with patch(
            "dephealth.engines.activity_scorer.scorer.clone_repository",
            new=AsyncMock(side_effect=CloneFailed("repository not found")),
        ) as mock_clone:
            activity = await ActivityScorer(settings).score("github.com/acme/missing")

        assert activity.error == "Failed to clone repository: repository not found"
        assert activity.is_active is False
        url, workdir = mock_clone.call_args.args
        assert url == "https://github.com/acme/missing"
        assert not workdir.exists()
