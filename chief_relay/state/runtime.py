"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from chief_relay.state.settings import AppSettings
    from chief_relay.realtime.bridge import RelayBridge
    from chief_relay.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    relay_bridge: RelayBridge
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.connections.close_all(timeout_s=self.settings.server.shutdown_timeout_s)
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
