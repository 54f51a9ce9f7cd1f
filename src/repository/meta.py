"""go-import / go-source meta tag discovery.

The landing page of an import path (``https://<path>?go-get=1``) may
declare where the source lives:

    <meta name="go-import" content="<prefix> <vcs> <repo-url>">
    <meta name="go-source" content="<prefix> <repo-url> <dir-tmpl> <file-tmpl>">

Only linking to source matters here, so the two are merged with go-source
preferred. Conflicting declarations are reported as AmbiguousMetadata
rather than resolved arbitrarily.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from common.deadline import Deadline, unbounded
from common.errors import AmbiguousMetadata, ModpeekError, NotFound
from common.http_client import fetch
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "go-import and go-source meta tags not found"


@dataclass(frozen=True)
class SourceMeta:
    """Merged go-source (or fallback go-import) declaration."""
    repo_root_prefix: str  # import path prefix corresponding to repo root
    repo_url: str


class _MetaCollector(HTMLParser):
    """Collect go-import/go-source meta tags up to the end of <head>."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.tags: List[Tuple[str, str]] = []
        self.done = False

    def handle_starttag(self, tag, attrs):
        if self.done:
            return
        if tag == "body":
            self.done = True
            return
        if tag != "meta":
            return
        values = {}
        for key, value in attrs:
            values.setdefault(key.lower(), value or "")
        name = values.get("name", "")
        if name in ("go-import", "go-source"):
            self.tags.append((name, values.get("content", "")))

    def handle_endtag(self, tag):
        if tag == "head":
            self.done = True


def _is_prefix_of(prefix: str, import_path: str) -> bool:
    if not import_path.startswith(prefix):
        return False
    return len(import_path) == len(prefix) or import_path[len(prefix)] == "/"


def parse_meta(import_path: str, html: str) -> SourceMeta:
    """Extract the source declaration for import_path from an HTML page.

    Raises:
        NotFound: no usable declaration.
        AmbiguousMetadata: more than one go-import tag, or go-import and
            go-source prefixes disagree.
    """
    collector = _MetaCollector()
    collector.feed(html)
    collector.close()

    message = NOT_FOUND_MESSAGE
    sm: Optional[SourceMeta] = None
    for name, content in collector.tags:
        fields = content.split()
        if not fields:
            continue
        prefix = fields[0]
        # A site may serve one page for many repositories.
        if not _is_prefix_of(prefix, import_path):
            continue
        if name == "go-import":
            if len(fields) != 3:
                message = "go-import meta tag content attribute does not have three fields"
                continue
            if fields[1] == "mod":
                # A module proxy declaration gives no browsable source.
                continue
            if sm is not None:
                raise AmbiguousMetadata(f"{import_path}: more than one go-import meta tag found")
            sm = SourceMeta(repo_root_prefix=prefix, repo_url=fields[2])
            # Keep going in the hope of finding a go-source tag.
            continue
        if len(fields) != 4:
            message = "go-source meta tag content attribute does not have four fields"
            continue
        if sm is not None and sm.repo_root_prefix != prefix:
            raise AmbiguousMetadata(
                f"{import_path}: import path prefixes {sm.repo_root_prefix!r} for go-import "
                f"and {prefix!r} for go-source disagree"
            )
        repo_url = fields[1]
        if repo_url == "_":
            if sm is None:
                raise NotFound(f'{import_path}: go-source repo is "_", but no previous go-import tag')
            repo_url = sm.repo_url
        return SourceMeta(repo_root_prefix=prefix, repo_url=repo_url)

    if sm is None:
        raise NotFound(f"{import_path}: {message}")
    return sm


def meta_url(import_path: str, scheme: str) -> str:
    uri = import_path
    if "/" not in uri:
        uri += "/"  # root of domain
    return f"{scheme}://{uri}?go-get=1"


def fetch_meta(import_path: str, deadline: Optional[Deadline] = None) -> SourceMeta:
    """Fetch the landing page of import_path and parse its meta tags.

    The secure URL is tried first and must answer 200. On any failure the
    plain http URL is tried once and its body is scanned whatever its
    status.

    Raises:
        NetworkFailure: both attempts failed to produce a response.
        NotFound / AmbiguousMetadata: as for parse_meta.
    """
    deadline = deadline or unbounded()
    try:
        res = fetch(meta_url(import_path, "https"), context="go-get https", deadline=deadline)
    except ModpeekError as first:
        if is_debug_enabled(logger):
            logger.debug(
                "Secure meta fetch failed; retrying insecure",
                extra=extra_context(
                    event="decision",
                    component="meta",
                    action="fetch_meta",
                    outcome="fallback_http",
                    target=import_path,
                )
            )
        logger.info("%s: %s; trying http", import_path, first)
        res = fetch(
            meta_url(import_path, "http"),
            context="go-get http",
            deadline=deadline,
            only_200=False,
        )
    return parse_meta(import_path, res.text)
