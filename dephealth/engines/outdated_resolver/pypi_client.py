"""Async PyPI JSON API client for latest-version lookups."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import httpx
import structlog

from dephealth.engines.outdated_resolver.models import VersionLookup

log = structlog.get_logger("dephealth.engine")

DEFAULT_PYPI_URL = "https://pypi.org"


class PyPIClient:
    """Thin async wrapper around ``GET /pypi/<name>/json``."""

    def __init__(
        self,
        base_url: str = DEFAULT_PYPI_URL,
        *,
        timeout: float = 10.0,
        concurrency: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        self._concurrency = max(1, concurrency)

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PyPIClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def latest_version(self, name: str) -> VersionLookup:
        """Resolve the latest published version of *name*.

        404 → NOT_FOUND. Any other failure → UNAVAILABLE; nothing is raised.
        """
        try:
            resp = await self._client.get(f"/pypi/{name}/json")
        except httpx.HTTPError as exc:
            log.warning("pypi.lookup_failed", package=name, error=str(exc))
            return VersionLookup.unavailable()

        if resp.status_code == 404:
            return VersionLookup.not_found()
        if resp.status_code != 200:
            log.warning("pypi.lookup_failed", package=name, status=resp.status_code)
            return VersionLookup.unavailable()

        try:
            version = resp.json()["info"]["version"]
        except (ValueError, KeyError, TypeError) as exc:
            log.warning("pypi.bad_payload", package=name, error=str(exc))
            return VersionLookup.unavailable()
        if not isinstance(version, str) or not version:
            log.warning("pypi.bad_payload", package=name, error="missing info.version")
            return VersionLookup.unavailable()
        return VersionLookup.resolved(version)

    async def latest_versions(self, names: Sequence[str]) -> list[VersionLookup]:
        """Look up every name concurrently; results align with *names* by index."""
        sem = asyncio.Semaphore(self._concurrency)

        async def _one(name: str) -> VersionLookup:
            async with sem:
                try:
                    return await self.latest_version(name)
                except Exception as exc:
                    log.error("pypi.lookup_crashed", package=name, error=str(exc))
                    return VersionLookup.unavailable()

        return list(await asyncio.gather(*(_one(n) for n in names)))
