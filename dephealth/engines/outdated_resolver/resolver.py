"""OutdatedResolver: per-ecosystem latest-version resolution."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import structlog

from dephealth.core.config import Settings
from dephealth.engines.dependency_scanner.models import DependencyDeclaration, Ecosystem
from dephealth.engines.outdated_resolver.models import OutdatedEntry, VersionLookup
from dephealth.engines.outdated_resolver.npm import npm_outdated
from dephealth.engines.outdated_resolver.pypi_client import PyPIClient

log = structlog.get_logger("dephealth.engine")


async def pip_outdated(
    declarations: Mapping[str, DependencyDeclaration],
    client: PyPIClient,
) -> list[OutdatedEntry]:
    """Compare each declared version with the latest release on PyPI."""
    names = list(declarations)
    latest = await client.latest_versions(names)

    entries: list[OutdatedEntry] = []
    for name, lookup in zip(names, latest):
        dep = declarations[name]
        current = VersionLookup.from_declared(dep.declared_version)
        entries.append(
            OutdatedEntry(
                name=name,
                current=current,
                wanted=current,
                latest=lookup,
                role=dep.role,
            )
        )
    return entries


class OutdatedResolver:
    """Resolve outdated status for a project's declared dependencies."""

    def __init__(self, settings: Settings | None = None, pypi: PyPIClient | None = None) -> None:
        self._settings = settings or Settings()
        self._pypi = pypi

    async def resolve(
        self,
        project_path: Path,
        ecosystem: Ecosystem,
        declarations: Mapping[str, DependencyDeclaration],
    ) -> list[OutdatedEntry]:
        if ecosystem is Ecosystem.NPM:
            return await npm_outdated(
                project_path,
                declarations,
                npm_bin=self._settings.npm_bin,
                timeout=self._settings.command_timeout,
            )

        if self._pypi is not None:
            return await pip_outdated(declarations, self._pypi)
        async with PyPIClient(
            self._settings.pypi_url,
            timeout=self._settings.http_timeout,
            concurrency=self._settings.lookup_concurrency,
        ) as client:
            return await pip_outdated(declarations, client)
