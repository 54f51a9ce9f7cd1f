"""Pure merge and annotation steps over version records.

Nothing here touches the network so the ordering and containment rules
can be exercised directly.
"""
from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, List

from .models import RetractionRange, VersionRecord
from .semver import compare


def sort_descending(records: Iterable[VersionRecord], cmp=compare) -> List[VersionRecord]:
    """Return records in descending version order; ties keep input order."""
    return sorted(records, key=cmp_to_key(lambda a, b: cmp(b.version, a.version)))


def unique(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Return records sorted descending with repeated versions omitted.

    The first record seen for a version is kept.
    """
    out: List[VersionRecord] = []
    for rec in sort_descending(records):
        if out and compare(out[-1].version, rec.version) == 0:
            continue
        out.append(rec)
    return out


def apply_retractions(
    records: Iterable[VersionRecord],
    ranges: Iterable[RetractionRange],
) -> List[VersionRecord]:
    """Mark every record lying in any range as retracted.

    Ranges are inclusive at both ends. When several ranges contain a
    version, the last one supplies the reason. Order of the records is
    preserved.
    """
    ranges = list(ranges)
    out: List[VersionRecord] = []
    for rec in records:
        hit = None
        for r in ranges:
            if r.contains(rec.version):
                hit = r
        out.append(rec.retract(hit.reason) if hit is not None else rec)
    return out
