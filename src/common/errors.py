"""Typed errors raised by the version catalog and repository resolvers.

Callers distinguish transient failures (network, 5xx) from confirmed
absences (no repository declaration) through the ``retryable`` attribute
and the class hierarchy rather than by parsing messages.
"""
from __future__ import annotations

from typing import Optional


class ModpeekError(Exception):
    """Base class for all modpeek errors."""

    retryable = False


class NetworkFailure(ModpeekError):
    """Transport level failure: connection refused, DNS, reset, timeout."""

    retryable = True

    def __init__(self, message: str, *, url: Optional[str] = None, context: Optional[str] = None):
        super().__init__(message)
        self.url = url
        self.context = context


class DeadlineExceeded(NetworkFailure):
    """The overall deadline elapsed before or during a request."""


class BadStatus(ModpeekError):
    """A response carried a status other than 200 where 200 was required."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: int = 0,
        reason: str = "",
        context: Optional[str] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.context = context

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code >= 500


class DecodeFailure(ModpeekError):
    """Malformed JSON, manifest, HTML, version list or module path."""


class NotFound(ModpeekError):
    """No static or metadata-derived repository declaration exists."""


class AmbiguousMetadata(NotFound):
    """Conflicting go-import/go-source declarations; resolves as not found."""


class PatternTableError(ModpeekError):
    """A static pattern rule is malformed (missing its ``repo`` group)."""
