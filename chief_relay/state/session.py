"""Per-connection relay session state."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SessionPhase(str, enum.Enum):
    CONNECTING = "connecting"
    UPSTREAM_OPEN = "upstream_open"
    AWAITING_CONFIG_ACK = "awaiting_config_ack"
    RELAYING = "relaying"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(slots=True)
class RelaySessionState:
    session_id: str
    phase: SessionPhase = SessionPhase.CONNECTING
    # Flipped once, from the upstream pump only, right before session.update goes out.
    config_sent: bool = False
    client_open: bool = True
    upstream_open: bool = False
    forwarded_to_upstream: int = 0
    forwarded_to_client: int = 0
    dropped: int = 0

    @property
    def is_closing(self) -> bool:
        return self.phase in (SessionPhase.CLOSING, SessionPhase.CLOSED)


__all__ = ["RelaySessionState", "SessionPhase"]
