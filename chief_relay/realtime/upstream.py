"""Outbound connection to the upstream Realtime API."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable
from urllib.parse import urlencode, urlparse, parse_qsl, urlunparse

import websockets
from websockets.exceptions import WebSocketException

from chief_relay.errors import UpstreamConnectError
from chief_relay.state.settings import UpstreamSettings
from chief_relay.config.upstream import UPSTREAM_AUTH_HEADER, UPSTREAM_BETA_HEADER

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Any]


class UpstreamConnector:
    """Open one authenticated upstream socket per relay session."""

    def __init__(self, settings: UpstreamSettings, *, connect_fn: ConnectFn | None = None) -> None:
        self._settings = settings
        self._connect_fn = connect_fn or websockets.connect

    def build_url(self) -> str:
        parsed = urlparse(self._settings.url)
        query = dict(parse_qsl(parsed.query, keep_blank_values=True))
        query["model"] = self._settings.model
        return urlunparse(
            (parsed.scheme, parsed.netloc, parsed.path, parsed.params, urlencode(query), parsed.fragment)
        )

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            UPSTREAM_AUTH_HEADER: f"Bearer {api_key}",
            UPSTREAM_BETA_HEADER: self._settings.beta_header,
        }

    async def connect(self, api_key: str) -> Any:
        url = self.build_url()
        timeout_s = self._settings.connect_timeout_s
        logger.info("connecting upstream: %s", url)
        try:
            return await self._connect_fn(
                url,
                additional_headers=self.build_headers(api_key),
                open_timeout=timeout_s,
                max_size=self._settings.max_message_bytes or None,
            )
        except TimeoutError as exc:
            raise UpstreamConnectError(f"timed out after {timeout_s:.1f}s") from exc
        except (OSError, WebSocketException) as exc:
            raise UpstreamConnectError(str(exc) or type(exc).__name__) from exc


__all__ = ["UpstreamConnector"]
