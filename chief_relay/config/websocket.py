"""WebSocket protocol configuration and constants."""

from __future__ import annotations

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"

DEFAULT_WS_ENDPOINT_PATH = "/"
DEFAULT_WS_IDLE_TIMEOUT_S = 300.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S = 0.0

# Message keys
WS_KEY_TYPE = "type"
WS_KEY_MESSAGE = "message"

# Message types the relay itself emits or inspects
WS_TYPE_ERROR = "error"
WS_TYPE_CONNECTION_ESTABLISHED = "connection_established"
WS_TYPE_SESSION_CREATED = "session.created"
WS_TYPE_SESSION_UPDATE = "session.update"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_INTERNAL_ERROR_CODE = 1011
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_UNAUTHORIZED_CODE = 4001
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"

# Human-readable notices
WS_MESSAGE_MISSING_API_KEY = "No OpenAI API key provided"
WS_MESSAGE_SERVER_AT_CAPACITY = "Server cannot accept new connections. Please try again later."
WS_MESSAGE_CONNECTION_ESTABLISHED = "Connected to OpenAI"

__all__ = [
    "DEFAULT_WS_ENDPOINT_PATH",
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "ENV_WS_ENDPOINT_PATH",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_KEY_MESSAGE",
    "WS_KEY_TYPE",
    "WS_MESSAGE_CONNECTION_ESTABLISHED",
    "WS_MESSAGE_MISSING_API_KEY",
    "WS_MESSAGE_SERVER_AT_CAPACITY",
    "WS_TYPE_CONNECTION_ESTABLISHED",
    "WS_TYPE_ERROR",
    "WS_TYPE_SESSION_CREATED",
    "WS_TYPE_SESSION_UPDATE",
]
