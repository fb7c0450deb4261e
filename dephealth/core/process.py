"""Async subprocess helper with a bounded timeout."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path


class CommandError(Exception):
    """Raised when a command cannot be started or exceeds its timeout."""


@dataclass
class CommandResult:
    """Exit status and decoded output of a finished command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_command(
    cmd: list[str],
    *,
    cwd: Path | str | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run *cmd* and capture its output.

    A non-zero exit code is returned, not raised; callers decide what it means
    (``npm outdated`` exits 1 when it has data to report).

    Raises ``CommandError`` if the executable is missing or the timeout
    expires. A timed-out process is killed before raising.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, PermissionError) as exc:
        raise CommandError(f"cannot run {cmd[0]}: {exc}") from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        proc.kill()
        await proc.wait()
        raise CommandError(f"{cmd[0]} timed out after {timeout}s") from exc

    return CommandResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
