"""Module version comparison with Go module semantics.

A valid version has a leading ``v``, ``MAJOR[.MINOR[.PATCH]]`` and optional
``-prerelease`` / ``+build`` parts; the shorthands ``vMAJOR`` and
``vMAJOR.MINOR`` carry no prerelease or build and are filled in with zeros.
Build metadata never affects ordering. Invalid strings compare equal to
each other and below every valid version.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

import semantic_version

_SHORT_RE = re.compile(r"^\d+(\.\d+)?$")


@lru_cache(maxsize=4096)
def _parse(v: str) -> Optional[semantic_version.Version]:
    """Return the build-free parsed version or None when invalid."""
    if not isinstance(v, str) or not v.startswith("v"):
        return None
    text = v[1:]
    if _SHORT_RE.match(text):
        text += ".0" if "." in text else ".0.0"
    try:
        parsed = semantic_version.Version(text)
    except ValueError:
        return None
    return semantic_version.Version(
        major=parsed.major,
        minor=parsed.minor,
        patch=parsed.patch,
        prerelease=parsed.prerelease,
    )


def is_valid(v: str) -> bool:
    return _parse(v) is not None


def compare(v: str, w: str) -> int:
    """Return -1, 0 or +1 as v sorts before, with, or after w."""
    pv, pw = _parse(v), _parse(w)
    if pv is None and pw is None:
        return 0
    if pv is None:
        return -1
    if pw is None:
        return 1
    if pv < pw:
        return -1
    if pv > pw:
        return 1
    return 0


def canonical(v: str) -> str:
    """Return vMAJOR.MINOR.PATCH[-pre] for v, or "" when v is invalid."""
    parsed = _parse(v)
    if parsed is None:
        return ""
    return "v" + str(parsed)


def prerelease(v: str) -> str:
    """Return the prerelease suffix of v including its leading "-"."""
    parsed = _parse(v)
    if parsed is None or not parsed.prerelease:
        return ""
    return "-" + ".".join(parsed.prerelease)


def replace_prefix(s: str, old: str, new: str) -> str:
    if not s.startswith(old):
        return s
    return new + s[len(old):]


def compare_toolchain(v: str, w: str) -> int:
    """Compare treating a leading "go" (go1.21.0) like the "v" prefix."""
    return compare(replace_prefix(v, "go", "v"), replace_prefix(w, "go", "v"))
