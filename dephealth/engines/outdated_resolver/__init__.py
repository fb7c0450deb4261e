"""Outdated resolver engine: latest versions from npm tooling or PyPI."""

from dephealth.engines.outdated_resolver.models import (
    LookupStatus,
    OutdatedEntry,
    VersionLookup,
)
from dephealth.engines.outdated_resolver.pypi_client import PyPIClient
from dephealth.engines.outdated_resolver.resolver import OutdatedResolver

__all__ = ["LookupStatus", "OutdatedEntry", "OutdatedResolver", "PyPIClient", "VersionLookup"]
