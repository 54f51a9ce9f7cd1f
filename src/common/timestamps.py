"""Timestamp parsing for proxy info documents and release indexes."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

# RFC 3339 allows 1-9 fractional digits; datetime wants exactly six.
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_rfc3339(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 string into an aware datetime.

    Returns None for None or blank input and raises ValueError for text
    that is not a timestamp.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, not {type(value).__name__}")
    text = value.strip()
    if not text:
        return None
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
