"""Commit-history statistics read from a local git clone."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from dephealth.core.process import CommandError, run_command
from dephealth.engines.activity_scorer.models import GitHistoryStats

RECENT_WINDOW = timedelta(days=30)


class GitHistoryError(Exception):
    """Raised when commit history cannot be read from a clone."""


async def _git(clone_path: Path, *args: str, git_bin: str, timeout: float | None) -> str:
    try:
        result = await run_command([git_bin, *args], cwd=clone_path, timeout=timeout)
    except CommandError as exc:
        raise GitHistoryError(str(exc)) from exc
    if not result.ok:
        raise GitHistoryError(
            f"git {args[0]} failed (exit {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout


async def read_git_history(
    clone_path: Path,
    *,
    now: datetime | None = None,
    git_bin: str = "git",
    timeout: float | None = None,
) -> GitHistoryStats:
    """Read last-commit date, 30-day and total commit counts, and author count.

    All figures are for commits reachable from the current branch tip.

    Raises GitHistoryError if any git command fails or prints nothing usable.
    """
    now = now or datetime.now(timezone.utc)

    raw_date = (await _git(clone_path, "log", "-1", "--format=%cI", git_bin=git_bin, timeout=timeout)).strip()
    if not raw_date:
        raise GitHistoryError("repository has no commits")
    try:
        last_commit_date = datetime.fromisoformat(raw_date.replace("Z", "+00:00"))
    except ValueError as exc:
        raise GitHistoryError(f"unparsable commit date: {raw_date!r}") from exc

    since = (now - RECENT_WINDOW).isoformat()
    recent = await _git(
        clone_path, "log", f"--since={since}", "--format=%h", git_bin=git_bin, timeout=timeout
    )
    recent_commit_count = sum(1 for line in recent.splitlines() if line.strip())

    total = (await _git(clone_path, "rev-list", "--count", "HEAD", git_bin=git_bin, timeout=timeout)).strip()
    try:
        total_commit_count = int(total)
    except ValueError as exc:
        raise GitHistoryError(f"unparsable commit count: {total!r}") from exc

    authors = await _git(clone_path, "log", "--format=%aN", git_bin=git_bin, timeout=timeout)
    contributor_count = len({line.strip() for line in authors.splitlines() if line.strip()})

    return GitHistoryStats(
        last_commit_date=last_commit_date,
        recent_commit_count=recent_commit_count,
        total_commit_count=total_commit_count,
        contributor_count=contributor_count,
    )
