"""Git clone helper for remote repository analysis."""

from __future__ import annotations

from pathlib import Path

import structlog

from dephealth.core.process import CommandError, run_command
from dephealth.exceptions import CloneFailed

log = structlog.get_logger("dephealth.engine")


async def clone_repository(
    repo_url: str,
    workdir: Path,
    *,
    git_bin: str = "git",
    timeout: float | None = None,
) -> Path:
    """Clone *repo_url* (full history) into *workdir* and return the clone path.

    The caller owns *workdir* and is responsible for removing it.

    Raises CloneFailed if git is unavailable, times out or exits non-zero.
    """
    target = workdir / "repo"
    log.info("repo.cloning", url=repo_url, target=str(target))

    try:
        result = await run_command(
            [git_bin, "clone", "--quiet", "--", repo_url, str(target)],
            timeout=timeout,
        )
    except CommandError as exc:
        raise CloneFailed(str(exc)) from exc

    if not result.ok:
        raise CloneFailed(
            f"git clone exited {result.returncode}: {result.stderr.strip()}"
        )
    return target
