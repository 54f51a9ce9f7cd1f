"""Module path validation and case-escaping for proxy requests.

Proxies are frequently backed by case-insensitive file systems, so every
uppercase letter in a module path is sent as "!" followed by its lowercase
form (github.com/Azure -> github.com/!azure).
"""
from __future__ import annotations

import re

from common.errors import DecodeFailure

_ELEM_RE = re.compile(r"^[A-Za-z0-9\-._~+]+$")
_FIRST_ELEM_RE = re.compile(r"^[a-z0-9\-._~]+$")


def check_path(path: str) -> None:
    """Raise DecodeFailure unless path is a well-formed module path."""
    if not path:
        raise DecodeFailure("malformed module path: empty string")
    if path.startswith("/") or path.endswith("/") or "//" in path:
        raise DecodeFailure(f"malformed module path {path!r}: leading, trailing or double slash")
    elems = path.split("/")
    first = elems[0]
    if not _FIRST_ELEM_RE.match(first):
        raise DecodeFailure(f"malformed module path {path!r}: invalid char in leading path element")
    if "." not in first:
        raise DecodeFailure(f"malformed module path {path!r}: missing dot in first path element")
    if first.startswith("-"):
        raise DecodeFailure(f"malformed module path {path!r}: leading dash in first path element")
    for elem in elems:
        if not _ELEM_RE.match(elem):
            raise DecodeFailure(f"malformed module path {path!r}: invalid char in path element {elem!r}")
        if elem.startswith(".") or elem.endswith("."):
            raise DecodeFailure(f"malformed module path {path!r}: path element {elem!r} has leading or trailing dot")


def escape_path(path: str) -> str:
    """Return the proxy-safe form of a module path."""
    check_path(path)
    out = []
    for ch in path:
        if "A" <= ch <= "Z":
            out.append("!" + ch.lower())
        else:
            out.append(ch)
    return "".join(out)
