"""Process surface configuration (ports, shutdown)."""

from __future__ import annotations

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_WS_PORT_OFFSET = "WS_PORT_OFFSET"
ENV_SHUTDOWN_TIMEOUT_S = "SHUTDOWN_TIMEOUT_S"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
# The WebSocket listener sits next to the HTTP one (3001 -> 3002).
DEFAULT_WS_PORT_OFFSET = 1
DEFAULT_SHUTDOWN_TIMEOUT_S = 10.0

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_SHUTDOWN_TIMEOUT_S",
    "DEFAULT_WS_PORT_OFFSET",
    "ENV_HOST",
    "ENV_PORT",
    "ENV_SHUTDOWN_TIMEOUT_S",
    "ENV_WS_PORT_OFFSET",
]
