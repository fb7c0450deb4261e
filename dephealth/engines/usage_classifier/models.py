"""Data models for the usage classifier."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UsageRecord:
    """Whether a declared dependency is referenced by project source."""

    name: str
    import_count: int = 0

    @property
    def used(self) -> bool:
        return self.import_count > 0

    def to_dict(self) -> dict:
        return {"name": self.name, "used": self.used, "importCount": self.import_count}
