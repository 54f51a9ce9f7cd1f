"""Overall deadline shared by every fetch of one operation."""
from __future__ import annotations

import time
from typing import Optional

from common.errors import DeadlineExceeded


class Deadline:
    """A single cancellable deadline measured on the monotonic clock.

    ``Deadline(None)`` never expires.
    """

    def __init__(self, seconds: Optional[float] = None, *, clock=time.monotonic):
        self._clock = clock
        self.seconds = seconds
        self._expires_at = None if seconds is None else clock() + seconds

    def remaining(self) -> Optional[float]:
        """Return seconds left, 0.0 once elapsed, or None when unbounded."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def _exceeded(self, context: str, url: Optional[str]) -> DeadlineExceeded:
        return DeadlineExceeded(
            f"{context}: deadline of {self.seconds}s exceeded",
            url=url,
            context=context,
        )

    def check(self, context: str, url: Optional[str] = None) -> None:
        """Raise DeadlineExceeded when the deadline has elapsed."""
        if self.expired():
            raise self._exceeded(context, url)

    def timeout_for(self, default: float, context: str, url: Optional[str] = None) -> float:
        """Return the per-request timeout bounded by the time remaining.

        The clock is read once, so the result is always positive; an elapsed
        deadline raises DeadlineExceeded instead.
        """
        remaining = self.remaining()
        if remaining is None:
            return default
        if remaining <= 0.0:
            raise self._exceeded(context, url)
        return min(default, remaining)


def unbounded() -> Deadline:
    return Deadline(None)
