"""Selection of catalog records for display."""

import re
from typing import List, Sequence, Tuple

from common.errors import NotFound
from .models import VersionRecord
from .semver import compare_toolchain, prerelease, replace_prefix


def select_for_display(
    records: Sequence[VersionRecord],
    current: str,
    include_all: bool,
    suffix_pattern: str = "",
) -> Tuple[List[VersionRecord], bool]:
    """Pick the records to print from a descending catalog.

    Unless include_all is set, listing stops at the first version not newer
    than current and retracted versions are skipped. Records are kept only
    when their prerelease suffix matches suffix_pattern.

    Returns:
        (selected records, whether any version newer than current exists)
    """
    suffix = re.compile(suffix_pattern)
    selected: List[VersionRecord] = []
    newer = False
    for rec in records:
        if not include_all and compare_toolchain(rec.version, current) <= 0:
            break
        newer = True
        if not include_all and rec.retracted:
            continue
        if not suffix.search(prerelease(replace_prefix(rec.version, "go", "v"))):
            continue
        selected.append(rec)
    return selected, newer


def latest_std_version(records: Sequence[VersionRecord]) -> str:
    """Return the newest toolchain version from a descending std catalog."""
    if not records:
        raise NotFound("no Go releases found")
    return records[0].version
