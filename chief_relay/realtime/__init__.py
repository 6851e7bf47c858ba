"""Realtime relay package."""

from .bridge import RelayBridge
from .session import RelaySession
from .upstream import UpstreamConnector

__all__ = ["RelayBridge", "RelaySession", "UpstreamConnector"]
