"""Upstream Realtime API connection configuration."""

from __future__ import annotations

ENV_UPSTREAM_URL = "OPENAI_REALTIME_URL"
ENV_UPSTREAM_MODEL = "OPENAI_REALTIME_MODEL"
ENV_UPSTREAM_BETA_HEADER = "OPENAI_REALTIME_BETA"
ENV_UPSTREAM_CONNECT_TIMEOUT_S = "UPSTREAM_CONNECT_TIMEOUT_S"
ENV_UPSTREAM_MAX_MESSAGE_BYTES = "UPSTREAM_MAX_MESSAGE_BYTES"

DEFAULT_UPSTREAM_URL = "wss://api.openai.com/v1/realtime"
DEFAULT_UPSTREAM_MODEL = "gpt-4o-realtime-preview-2024-10-01"
DEFAULT_UPSTREAM_BETA_HEADER = "realtime=v1"
DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S = 10.0
# Audio deltas can be large; 0 disables the frame size limit.
DEFAULT_UPSTREAM_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

UPSTREAM_AUTH_HEADER = "Authorization"
UPSTREAM_BETA_HEADER = "OpenAI-Beta"

__all__ = [
    "DEFAULT_UPSTREAM_BETA_HEADER",
    "DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S",
    "DEFAULT_UPSTREAM_MAX_MESSAGE_BYTES",
    "DEFAULT_UPSTREAM_MODEL",
    "DEFAULT_UPSTREAM_URL",
    "ENV_UPSTREAM_BETA_HEADER",
    "ENV_UPSTREAM_CONNECT_TIMEOUT_S",
    "ENV_UPSTREAM_MAX_MESSAGE_BYTES",
    "ENV_UPSTREAM_MODEL",
    "ENV_UPSTREAM_URL",
    "UPSTREAM_AUTH_HEADER",
    "UPSTREAM_BETA_HEADER",
]
