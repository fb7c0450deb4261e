"""Usage classifier: mark declared dependencies used or unused.

Counts are derived from a static scan of the project's own source files, so
identical input always yields identical records.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

import structlog

from dephealth.engines.dependency_scanner.models import Ecosystem
from dephealth.engines.usage_classifier.imports import count_references
from dephealth.engines.usage_classifier.models import UsageRecord

log = structlog.get_logger("dephealth.engine")

# PyPI distributions whose import name differs from the normalized project name
KNOWN_IMPORT_NAMES: dict[str, tuple[str, ...]] = {
    "beautifulsoup4": ("bs4",),
    "pillow": ("PIL",),
    "pyyaml": ("yaml",),
    "scikit-learn": ("sklearn",),
    "scikit-image": ("skimage",),
    "python-dateutil": ("dateutil",),
    "opencv-python": ("cv2",),
    "opencv-python-headless": ("cv2",),
    "protobuf": ("google",),
    "pyjwt": ("jwt",),
    "python-dotenv": ("dotenv",),
    "pymysql": ("pymysql",),
    "mysqlclient": ("MySQLdb",),
    "psycopg2-binary": ("psycopg2",),
    "attrs": ("attr", "attrs"),
    "setuptools": ("setuptools", "pkg_resources"),
    "pyserial": ("serial",),
    "pycryptodome": ("Crypto",),
    "python-multipart": ("multipart",),
    "typing-extensions": ("typing_extensions",),
}


def _canonical(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def python_module_names(distribution: str) -> tuple[str, ...]:
    """Import names a PyPI distribution is expected to provide."""
    canonical = _canonical(distribution)
    known = KNOWN_IMPORT_NAMES.get(canonical)
    if known:
        return known
    return (canonical.replace("-", "_"),)


def classify(
    names: Iterable[str], references: Counter[str], ecosystem: Ecosystem
) -> list[UsageRecord]:
    """Build one record per name, in input order, from reference counts."""
    if ecosystem is Ecosystem.PIP:
        lowered: Counter[str] = Counter()
        for module, count in references.items():
            lowered[module.lower()] += count
        records = []
        for name in names:
            modules = {m.lower() for m in python_module_names(name)}
            records.append(UsageRecord(name=name, import_count=sum(lowered[m] for m in modules)))
        return records

    return [UsageRecord(name=name, import_count=references[name]) for name in names]


def classify_usage(root: Path, names: Iterable[str], ecosystem: Ecosystem) -> list[UsageRecord]:
    """Scan *root* and classify each declared dependency name."""
    names = list(names)
    references = count_references(root, python=ecosystem is Ecosystem.PIP)
    records = classify(names, references, ecosystem)
    log.debug(
        "usage.classified",
        path=str(root),
        declared=len(records),
        used=sum(1 for r in records if r.used),
    )
    return records
