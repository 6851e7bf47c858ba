from __future__ import annotations

import pytest

from chief_relay.errors import RateLimitError
from chief_relay.handlers.limits import SlidingWindowRateLimiter


class _Clock:
    def __init__(self) -> None:
        self.t = 0.0

    def __call__(self) -> float:
        return self.t


def test_saturated_window_rejects_with_retry_hint() -> None:
    clock = _Clock()
    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=10, now_fn=clock)
    limiter.consume()
    clock.t = 4.0
    limiter.consume()

    with pytest.raises(RateLimitError) as exc:
        limiter.consume()
    assert exc.value.limit == 2
    assert exc.value.window_seconds == 10
    assert exc.value.retry_in == pytest.approx(6.0)


def test_window_slides_as_old_events_expire() -> None:
    clock = _Clock()
    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=10, now_fn=clock)
    limiter.consume()
    clock.t = 4.0
    limiter.consume()

    clock.t = 10.0
    limiter.consume()
    assert limiter.retry_in() == pytest.approx(4.0)
    with pytest.raises(RateLimitError):
        limiter.consume()


def test_rejected_events_do_not_count() -> None:
    clock = _Clock()
    limiter = SlidingWindowRateLimiter(limit=1, window_seconds=5, now_fn=clock)
    limiter.consume()
    for step in (1.0, 2.0, 3.0):
        clock.t = step
        with pytest.raises(RateLimitError):
            limiter.consume()
    clock.t = 5.0
    limiter.consume()


def test_non_positive_bounds_disable_limiter() -> None:
    for limit, window in ((0, 60), (10, 0)):
        limiter = SlidingWindowRateLimiter(limit=limit, window_seconds=window)
        assert limiter.enabled is False
        for _ in range(100):
            limiter.consume()


def test_rejection_notice_is_claimed_once_per_window() -> None:
    clock = _Clock()
    limiter = SlidingWindowRateLimiter(limit=1, window_seconds=10, now_fn=clock)
    assert limiter.claim_notice() is True
    clock.t = 9.0
    assert limiter.claim_notice() is False
    clock.t = 10.0
    assert limiter.claim_notice() is True
