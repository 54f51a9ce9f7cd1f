"""Minimal go.mod parser extracting retract directives.

Only retractions are returned, but the whole file is checked: unknown
directives, unbalanced blocks and malformed retract arguments are reported
as DecodeFailure with the document name and line number.

Rationale text follows the go.mod convention: the ``//`` comment lines
directly above a directive plus its trailing comment. A line inside a
``retract ( ... )`` block that carries no comments of its own inherits the
block's comments.
"""
from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

from common.errors import DecodeFailure
from .models import RetractionRange
from .semver import canonical, is_valid

logger = logging.getLogger(__name__)

KNOWN_VERBS = frozenset({
    "module", "go", "toolchain", "godebug", "require", "exclude",
    "replace", "retract", "tool", "ignore",
})

_PUNCT = "()[],"


def _lex_line(name: str, lineno: int, line: str) -> Tuple[List[str], Optional[str]]:
    """Split one line into tokens and an optional trailing comment."""
    tokens: List[str] = []
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch.isspace():
            i += 1
            continue
        if line.startswith("//", i):
            return tokens, line[i:].rstrip()
        if ch in _PUNCT:
            tokens.append(ch)
            i += 1
            continue
        if ch == '"':
            j = i + 1
            while j < n and line[j] != '"':
                j += 2 if line[j] == "\\" else 1
            if j >= n:
                raise DecodeFailure(f"{name}:{lineno}: unterminated quoted string")
            try:
                tokens.append(json.loads(line[i:j + 1]))
            except ValueError as exc:
                raise DecodeFailure(f"{name}:{lineno}: invalid quoted string") from exc
            i = j + 1
            continue
        if ch == "`":
            j = line.find("`", i + 1)
            if j < 0:
                raise DecodeFailure(f"{name}:{lineno}: unterminated raw string")
            tokens.append(line[i + 1:j])
            i = j + 1
            continue
        j = i
        while j < n and not line[j].isspace() and line[j] not in _PUNCT and not line.startswith("//", j):
            j += 1
        tokens.append(line[i:j])
        i = j
    return tokens, None


def _rationale(comments: List[str]) -> str:
    lines = []
    for c in comments:
        if c.startswith("//"):
            lines.append(c[2:].strip())
    return "\n".join(lines)


def _parse_version(name: str, lineno: int, token: str) -> str:
    if not is_valid(token):
        raise DecodeFailure(f"{name}:{lineno}: retract: invalid version {token!r}")
    cv = canonical(token)
    if token not in (cv, cv + "+incompatible"):
        raise DecodeFailure(f"{name}:{lineno}: retract: version {token!r} must be of the form v1.2.3")
    return token


def _parse_retract_args(name: str, lineno: int, args: List[str], reason: str) -> RetractionRange:
    if len(args) == 1 and args[0] not in _PUNCT:
        v = _parse_version(name, lineno, args[0])
        return RetractionRange(low=v, high=v, reason=reason)
    if len(args) == 5 and args[0] == "[" and args[2] == "," and args[4] == "]":
        low = _parse_version(name, lineno, args[1])
        high = _parse_version(name, lineno, args[3])
        return RetractionRange(low=low, high=high, reason=reason)
    raise DecodeFailure(
        f"{name}:{lineno}: usage: retract version or retract [low, high]"
    )


def parse_retractions(name: str, text: str) -> List[RetractionRange]:
    """Return the retraction ranges declared in the go.mod text.

    Args:
        name: Document name used in error messages (e.g. the .mod URL).
        text: go.mod content.

    Raises:
        DecodeFailure: the document is not a well-formed go.mod file.
    """
    retractions: List[RetractionRange] = []
    before: List[str] = []
    block_verb: Optional[str] = None
    block_comments: List[str] = []
    block_start = 0

    for lineno, raw in enumerate(text.splitlines(), start=1):
        tokens, suffix = _lex_line(name, lineno, raw)

        if not tokens:
            if suffix is None:
                before = []  # blank line detaches pending comments
            else:
                before.append(suffix)
            continue

        own_comments = before + ([suffix] if suffix else [])
        before = []

        if block_verb is not None:
            if tokens == [")"]:
                block_verb = None
                continue
            if ")" in tokens or "(" in tokens:
                raise DecodeFailure(f"{name}:{lineno}: unexpected parenthesis in {block_verb} block")
            if block_verb == "retract":
                comments = own_comments if own_comments else block_comments
                retractions.append(_parse_retract_args(name, lineno, tokens, _rationale(comments)))
            continue

        verb, args = tokens[0], tokens[1:]
        if verb not in KNOWN_VERBS:
            raise DecodeFailure(f"{name}:{lineno}: unknown directive: {verb}")
        if args == ["("]:
            block_verb = verb
            block_comments = own_comments
            block_start = lineno
            continue
        if "(" in args or ")" in args:
            raise DecodeFailure(f"{name}:{lineno}: unexpected parenthesis after {verb}")
        if verb == "retract":
            retractions.append(_parse_retract_args(name, lineno, args, _rationale(own_comments)))

    if block_verb is not None:
        raise DecodeFailure(f"{name}:{block_start}: unterminated {block_verb} block")

    logger.debug("Parsed %d retraction(s) from %s", len(retractions), name)
    return retractions
