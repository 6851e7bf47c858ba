"""Configuration module exports (env names and defaults only)."""

from .limits import (
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
)

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
]
