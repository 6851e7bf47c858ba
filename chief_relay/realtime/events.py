"""Closed set of message kinds the relay inspects.

Everything the relay forwards is classified into one of these variants.
Only `SessionCreated` and `UpstreamError` change relay behavior; any other
parseable JSON is `Passthrough` and its raw bytes are forwarded as-is, even
when it carries no usable `type`. Only undecodable input is `Malformed`.
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from chief_relay.config.websocket import WS_KEY_TYPE, WS_TYPE_ERROR, WS_KEY_MESSAGE, WS_TYPE_SESSION_CREATED


@dataclass(frozen=True, slots=True)
class SessionCreated:
    type: str = WS_TYPE_SESSION_CREATED


@dataclass(frozen=True, slots=True)
class UpstreamError:
    message: str
    type: str = WS_TYPE_ERROR


@dataclass(frozen=True, slots=True)
class Passthrough:
    type: str


@dataclass(frozen=True, slots=True)
class Malformed:
    reason: str


RelayEvent = SessionCreated | UpstreamError | Passthrough | Malformed


def _error_message(event: dict[str, Any]) -> str:
    # Upstream nests details under "error"; relay-built notices are flat.
    err = event.get("error")
    if isinstance(err, dict) and isinstance(err.get(WS_KEY_MESSAGE), str):
        return err[WS_KEY_MESSAGE]
    msg = event.get(WS_KEY_MESSAGE)
    if isinstance(msg, str):
        return msg
    return "unknown error"


def parse_event(raw: str | bytes) -> RelayEvent:
    """Classify one raw WebSocket message without re-serializing it."""
    try:
        event = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        return Malformed(reason=f"invalid JSON: {exc}")

    if not isinstance(event, dict):
        return Passthrough(type="")

    msg_type = event.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str):
        return Passthrough(type="")

    if msg_type == WS_TYPE_SESSION_CREATED:
        return SessionCreated()
    if msg_type == WS_TYPE_ERROR:
        return UpstreamError(message=_error_message(event))
    return Passthrough(type=msg_type)


__all__ = ["Malformed", "Passthrough", "RelayEvent", "SessionCreated", "UpstreamError", "parse_event"]
