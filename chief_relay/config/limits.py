"""Admission control and rate limit configuration (env names and defaults only)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
ENV_WS_MESSAGE_WINDOW_SECONDS = "WS_MESSAGE_WINDOW_SECONDS"
ENV_WS_MAX_MESSAGES_PER_WINDOW = "WS_MAX_MESSAGES_PER_WINDOW"

DEFAULT_MAX_CONCURRENT_CONNECTIONS = 100
DEFAULT_WS_MESSAGE_WINDOW_SECONDS = 60.0

# 0 disables the limit. Browser worklets push 128-sample blocks, close to
# 11k append messages per minute of speech at 24kHz.
DEFAULT_WS_MAX_MESSAGES_PER_WINDOW = 0

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_WS_MAX_MESSAGES_PER_WINDOW",
    "DEFAULT_WS_MESSAGE_WINDOW_SECONDS",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "ENV_WS_MAX_MESSAGES_PER_WINDOW",
    "ENV_WS_MESSAGE_WINDOW_SECONDS",
]
