"""Rate limiting for client-to-upstream messages."""

from __future__ import annotations

import math
import logging
from typing import Any

from chief_relay.errors import RateLimitError
from chief_relay.handlers.limits import SlidingWindowRateLimiter

from .errors import send_error

logger = logging.getLogger(__name__)


def build_message_limiter(*, limit: int, window_seconds: float) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(limit=limit, window_seconds=window_seconds)


async def consume_limiter(ws: Any, limiter: SlidingWindowRateLimiter) -> bool:
    """Consume one slot; on saturation return False, notifying the client once per window."""
    try:
        limiter.consume()
    except RateLimitError as exc:
        retry_in_s = int(max(1, math.ceil(float(exc.retry_in)))) if exc.retry_in else 1
        logger.debug("client message rate limit hit (limit=%d); dropping message", limiter.limit)
        if not limiter.claim_notice():
            return False
        logger.warning("client message rate limit hit (limit=%d); dropping until the window frees", limiter.limit)
        await send_error(
            ws,
            f"Rate limit: at most {limiter.limit} messages per {int(limiter.window_seconds)} seconds; "
            f"retry in {retry_in_s} seconds",
        )
        return False
    return True


__all__ = ["build_message_limiter", "consume_limiter"]
