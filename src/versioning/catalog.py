"""Version catalog resolver.

Queries each configured module proxy for the versions of a module, merges
the results into a descending, duplicate-free list and annotates versions
withdrawn by retract directives. The standard library is answered from the
Go release index instead.

Any failed or undecodable document aborts the whole call: a silently
skipped mirror or manifest could hide a retraction.
"""
from __future__ import annotations

import json
import logging
from functools import cmp_to_key
from typing import Any, Dict, List, Optional, Sequence

from constants import Constants
from common.deadline import Deadline, unbounded
from common.errors import DecodeFailure
from common.http_client import get_body
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from common.timestamps import parse_rfc3339
from .models import RetractionRange, VersionRecord
from .modfile import parse_retractions
from .module_path import escape_path
from .retractions import apply_retractions, unique
from .semver import compare_toolchain

logger = logging.getLogger(__name__)


def _field(doc: Dict[str, Any], name: str) -> Any:
    """Case-insensitive lookup of a JSON object key."""
    if name in doc:
        return doc[name]
    lowered = name.lower()
    for key, value in doc.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return None


def _record_from_doc(doc: Any, source: str, fallback_version: Optional[str] = None) -> VersionRecord:
    if not isinstance(doc, dict):
        raise DecodeFailure(f"{source}: invalid version information: expected an object")
    version = _field(doc, "Version") or fallback_version
    if not isinstance(version, str) or not version:
        raise DecodeFailure(f"{source}: invalid version information: missing Version")
    try:
        published = parse_rfc3339(_field(doc, "Time"))
    except ValueError as exc:
        raise DecodeFailure(f"{source}: invalid version information: bad Time: {exc}") from exc
    return VersionRecord(version=version, published_at=published)


def _loads(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeFailure(f"{source}: invalid version information: {exc}") from exc


def std_versions(deadline: Optional[Deadline] = None, url: str = Constants.GO_DL_URL) -> List[VersionRecord]:
    """Return Go toolchain releases, newest first.

    Versions carry the "go" prefix (go1.21.0); they are ordered as if the
    prefix were "v". Retractions do not apply.
    """
    body = get_body(url, context="go release index", deadline=deadline)
    data = _loads(body, safe_url(url))
    if not isinstance(data, list):
        raise DecodeFailure(f"{safe_url(url)}: invalid version information: expected an array")
    records = [_record_from_doc(item, safe_url(url)) for item in data]
    records.sort(key=cmp_to_key(lambda a, b: compare_toolchain(b.version, a.version)))
    logger.info("Found %d Go releases", len(records))
    return records


def _module_base(proxy: str, escaped: str) -> str:
    return f"{proxy.rstrip('/')}/{escaped}/@v/"


def fetch_version_list(
    proxy: str,
    escaped: str,
    deadline: Optional[Deadline] = None,
) -> List[str]:
    """Return the version strings a mirror lists for an escaped module path."""
    url = _module_base(proxy, escaped) + "list"
    body = get_body(url, context=f"{proxy} version list", deadline=deadline)
    return [line.strip() for line in body.splitlines() if line.strip()]


def fetch_info(
    proxy: str,
    escaped: str,
    version: str,
    deadline: Optional[Deadline] = None,
) -> VersionRecord:
    """Return the record described by a version's .info document."""
    url = _module_base(proxy, escaped) + version + ".info"
    body = get_body(url, context=f"{proxy} info {version}", deadline=deadline)
    return _record_from_doc(_loads(body, safe_url(url)), safe_url(url), fallback_version=version)


def fetch_retractions(
    proxy: str,
    escaped: str,
    version: str,
    deadline: Optional[Deadline] = None,
) -> List[RetractionRange]:
    """Return the retractions declared in a version's go.mod."""
    url = _module_base(proxy, escaped) + version + ".mod"
    body = get_body(url, context=f"{proxy} mod {version}", deadline=deadline)
    return parse_retractions(safe_url(url), body)


def list_versions(
    module: str,
    current: str,
    include_all: bool,
    proxies: Sequence[str],
    deadline: Optional[Deadline] = None,
) -> List[VersionRecord]:
    """Return the versions of module known to the proxies, newest first.

    Args:
        module: Module path, or "std" for the standard library.
        current: Installed version; older versions are skipped unless
            include_all is set. Toolchain-style "go" prefixes are accepted.
        include_all: Keep versions older than current.
        proxies: Mirror base URLs ("off"/"direct" already removed).
        deadline: Overall deadline shared by every request.

    Returns:
        Descending, duplicate-free list with retractions applied.
    """
    deadline = deadline or unbounded()
    if module == Constants.STD_MODULE:
        return std_versions(deadline)

    escaped = escape_path(module)
    records: List[VersionRecord] = []
    ranges: List[RetractionRange] = []

    for proxy in proxies:
        listed = fetch_version_list(proxy, escaped, deadline)
        kept = [v for v in listed if include_all or compare_toolchain(v, current) >= 0]
        if is_debug_enabled(logger):
            logger.debug(
                "Version list fetched",
                extra=extra_context(
                    event="decision",
                    component="catalog",
                    action="filter_versions",
                    target=safe_url(proxy),
                    listed=len(listed),
                    kept=len(kept),
                )
            )
        for version in kept:
            records.append(fetch_info(proxy, escaped, version, deadline))
            ranges.extend(fetch_retractions(proxy, escaped, version, deadline))

    merged = apply_retractions(unique(records), ranges)
    logger.info(
        "Resolved %d version(s) of %s from %d proxy(ies), %d retraction range(s)",
        len(merged), module, len(proxies), len(ranges),
    )
    return merged
