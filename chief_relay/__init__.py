"""Realtime voice relay between Chief clients and the OpenAI Realtime API."""

__version__ = "0.1.0"

__all__ = ["__version__"]
