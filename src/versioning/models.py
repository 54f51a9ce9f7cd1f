"""Data models for version catalogs and retractions."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from .semver import canonical, compare


@dataclass(frozen=True, eq=False)
class VersionRecord:
    """One released version as reported by a proxy or the Go release index.

    Records are equal when their versions are equal under semantic-version
    comparison; publication time and retraction state do not participate.
    """
    version: str
    published_at: Optional[datetime] = None
    retracted: bool = False
    retraction_reason: Optional[str] = None

    def __eq__(self, other):
        if not isinstance(other, VersionRecord):
            return NotImplemented
        return compare(self.version, other.version) == 0

    def __hash__(self):
        return hash(canonical(self.version))

    def retract(self, reason: Optional[str]) -> "VersionRecord":
        """Return a copy marked retracted with reason."""
        return replace(self, retracted=True, retraction_reason=reason or None)


@dataclass(frozen=True)
class RetractionRange:
    """Inclusive interval [low, high] of retracted versions and its rationale."""
    low: str
    high: str
    reason: str = ""

    def contains(self, version: str) -> bool:
        return compare(version, self.low) >= 0 and compare(version, self.high) <= 0
