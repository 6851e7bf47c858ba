"""WebSocket credential extraction."""

from __future__ import annotations

from typing import Any


def get_api_key(ws: Any) -> str:
    # Query param is easiest for browser WS clients, which cannot set headers.
    key = (ws.query_params.get("api_key") or "").strip()
    if key:
        return key
    return (ws.headers.get("x-api-key") or "").strip()


def resolve_api_key(ws: Any, *, default_api_key: str) -> str:
    """Return the client's credential, else the server default, else ""."""
    return get_api_key(ws) or (default_api_key or "").strip()


__all__ = ["get_api_key", "resolve_api_key"]
