"""Ephemeral workspace for temporary repository clones."""

from __future__ import annotations

import asyncio
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog

log = structlog.get_logger("dephealth.engine")

WORKSPACE_PREFIX = "dep-health-"


class EphemeralWorkspace:
    """A uniquely named temporary directory with a guaranteed release.

    ``release()`` is idempotent and never raises; a failed removal is logged.
    """

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self.path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=base_dir))
        self._released = False
        log.debug("workspace.acquired", path=str(self.path))

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            shutil.rmtree(self.path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("workspace.cleanup_failed", path=str(self.path), error=str(exc))
        else:
            log.debug("workspace.released", path=str(self.path))


@asynccontextmanager
async def ephemeral_workspace(base_dir: Path | str | None = None) -> AsyncIterator[Path]:
    """Yield a fresh workspace directory, removed on every exit path.

    Creation and removal run in a worker thread so a large clone does not
    stall the event loop.
    """
    workspace = await asyncio.to_thread(EphemeralWorkspace, base_dir)
    try:
        yield workspace.path
    finally:
        await asyncio.to_thread(workspace.release)
