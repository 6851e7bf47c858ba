"""Sliding-window rate limiter for inbound client messages."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable

from chief_relay.errors import RateLimitError

TimeFn = Callable[[], float]


class SlidingWindowRateLimiter:
    """At most `limit` events in any `window_seconds` span.

    Only the last `limit` timestamps are kept: the window is saturated exactly
    when the oldest of them is still inside it. Disabled if either bound is
    non-positive.
    """

    def __init__(self, *, limit: int, window_seconds: float, now_fn: TimeFn | None = None) -> None:
        self.limit = max(0, int(limit))
        self.window_seconds = max(0.0, float(window_seconds))
        self.enabled = self.limit > 0 and self.window_seconds > 0
        self._now = now_fn or time.monotonic
        self._stamps: deque[float] = deque(maxlen=self.limit or None)
        self._next_notice_at: float | None = None

    def retry_in(self, now: float | None = None) -> float:
        """Seconds until the next event would be admitted (0 when it would be now)."""
        if not self.enabled or len(self._stamps) < self.limit:
            return 0.0
        now = self._now() if now is None else now
        return max(0.0, self._stamps[0] + self.window_seconds - now)

    def consume(self) -> None:
        if not self.enabled:
            return
        now = self._now()
        wait = self.retry_in(now)
        if wait > 0:
            raise RateLimitError(retry_in=wait, limit=self.limit, window_seconds=self.window_seconds)
        self._stamps.append(now)

    def claim_notice(self) -> bool:
        """True at most once per window; gates the client-facing rejection notice."""
        now = self._now()
        if self._next_notice_at is not None and now < self._next_notice_at:
            return False
        self._next_notice_at = now + self.window_seconds
        return True


__all__ = ["SlidingWindowRateLimiter"]
