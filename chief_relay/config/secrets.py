"""Secrets and authentication configuration."""

from __future__ import annotations

# Server-side fallback credential for clients that do not send their own.
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"

__all__ = ["ENV_OPENAI_API_KEY"]
