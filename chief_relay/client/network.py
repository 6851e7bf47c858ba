"""URL helpers for connecting to the relay."""

from __future__ import annotations

from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

DEFAULT_SERVER = "localhost:3002"


def ws_url(server: str, *, secure: bool = False, path: str = "/") -> str:
    """Normalize `host:port`, http(s):// or ws(s):// input to a WebSocket URL."""
    server = (server or DEFAULT_SERVER).strip()
    if server.startswith(("ws://", "wss://")):
        parsed = urlparse(server)
        return urlunparse((parsed.scheme, parsed.netloc, parsed.path or path, "", parsed.query, ""))
    if server.startswith(("http://", "https://")):
        parsed = urlparse(server)
        scheme = "wss" if (parsed.scheme == "https" or secure) else "ws"
        return urlunparse((scheme, parsed.netloc, parsed.path or path, "", parsed.query, ""))
    scheme = "wss" if secure else "ws"
    return f"{scheme}://{server.rstrip('/')}{path}"


def append_auth_query(url: str, api_key: str, override: bool = False) -> str:
    """Set the `api_key` query parameter the relay reads.

    Existing values are kept unless `override` is set.
    """
    parsed = urlparse(url)
    query_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    if override or ("api_key" not in query_params):
        query_params["api_key"] = api_key
    new_query = urlencode(query_params)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment))


def build_relay_url(server: str, *, api_key: str | None = None, secure: bool = False) -> str:
    url = ws_url(server, secure=secure)
    if api_key:
        url = append_auth_query(url, api_key)
    return url


__all__ = ["append_auth_query", "build_relay_url", "ws_url"]
