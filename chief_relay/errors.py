"""Shared error types for the Chief voice relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a sliding-window rate limiter is saturated."""

    retry_in: float
    limit: int
    window_seconds: float


class UpstreamConnectError(Exception):
    """Raised when the upstream Realtime socket cannot be opened."""


class AudioDeviceError(Exception):
    """Raised when no microphone or speaker can be opened (denied, missing, busy)."""


class ClientNotConnectedError(Exception):
    """Raised when a client operation needs an open relay connection."""


__all__ = ["AudioDeviceError", "ClientNotConnectedError", "RateLimitError", "UpstreamConnectError"]
