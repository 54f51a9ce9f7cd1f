"""Shared HTTP helpers used by the version catalog and repository resolvers.

Encapsulates request/timeout error handling so callers receive typed
errors instead of duplicating try/except blocks. Every request is bounded
by the caller's Deadline. No retries are performed here; retry policy
belongs to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from constants import Constants
from common.deadline import Deadline, unbounded
from common.errors import BadStatus, DeadlineExceeded, NetworkFailure
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Status, final URL and decoded body of a completed GET."""
    status_code: int
    url: str
    text: str
    reason: str = ""


def fetch(
    url: str,
    *,
    context: str,
    deadline: Optional[Deadline] = None,
    only_200: bool = True,
) -> FetchResult:
    """Perform a GET request bounded by deadline, with DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs and errors
            (e.g. "proxy.golang.org list").
        deadline: Overall deadline; an unbounded one is used when omitted.
        only_200: Raise BadStatus for any status other than 200.

    Returns:
        FetchResult for the response.

    Raises:
        DeadlineExceeded: the deadline elapsed before the request or while
            its body was read, or a socket read timed out.
        NetworkFailure: connection level failure.
        BadStatus: non-200 response while only_200 is set.
    """
    deadline = deadline or unbounded()
    safe_target = safe_url(url)
    timeout = deadline.timeout_for(Constants.REQUEST_TIMEOUT, context, url=safe_target)

    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                    timeout=timeout,
                )
            )
        try:
            res = requests.get(
                url,
                timeout=timeout,
                headers={"User-Agent": Constants.USER_AGENT},
                stream=True,
            )
        except requests.RequestException as exc:
            raise _transport_error(exc, context, safe_target, timeout) from exc

        try:
            reason = getattr(res, "reason", "") or ""
            if only_200 and res.status_code != 200:
                logger.warning(
                    "%s: GET %s returned status %s",
                    context,
                    safe_target,
                    res.status_code,
                )
                raise BadStatus(
                    f"{context}: GET {safe_target}: status {res.status_code} {reason}".rstrip(),
                    url=safe_target,
                    status_code=res.status_code,
                    reason=reason,
                    context=context,
                )
            text = _read_text(res, deadline, context, safe_target, timeout)
        finally:
            res.close()

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success" if res.status_code == 200 else "non_200",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context,
            )
        )

    return FetchResult(status_code=res.status_code, url=url, text=text, reason=reason)


def _transport_error(exc, context: str, safe_target: str, timeout: float) -> NetworkFailure:
    if isinstance(exc, requests.Timeout):
        logger.error("%s request timed out after %.1f seconds", context, timeout)
        return DeadlineExceeded(
            f"{context}: request to {safe_target} timed out",
            url=safe_target,
            context=context,
        )
    logger.error("%s connection error: %s", context, exc)
    return NetworkFailure(
        f"{context}: GET {safe_target}: {exc}",
        url=safe_target,
        context=context,
    )


def _read_text(res, deadline: Deadline, context: str, safe_target: str, timeout: float) -> str:
    """Read a streamed body chunk by chunk, checking the deadline between chunks.

    The request timeout only bounds each socket read, so a server trickling
    bytes would otherwise outlive the deadline.
    """
    chunks = []
    try:
        for chunk in res.iter_content(chunk_size=Constants.READ_CHUNK_SIZE):
            deadline.check(context, url=safe_target)
            chunks.append(chunk)
    except requests.RequestException as exc:
        # A read timeout surfaces here as a ConnectionError.
        deadline.check(context, url=safe_target)
        raise _transport_error(exc, context, safe_target, timeout) from exc
    body = b"".join(chunks)
    try:
        return body.decode(res.encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def get_body(url: str, *, context: str, deadline: Optional[Deadline] = None) -> str:
    """Return the body of a GET to url; any non-200 status is an error."""
    return fetch(url, context=context, deadline=deadline, only_200=True).text
