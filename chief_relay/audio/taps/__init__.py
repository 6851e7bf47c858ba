"""Microphone tap strategies, in preference order."""

from .base import MicTap, BlockFn, import_sounddevice
from .blocking import BlockingTap
from .callback import CallbackTap

DEFAULT_TAPS: tuple[type[MicTap], ...] = (CallbackTap, BlockingTap)

__all__ = ["DEFAULT_TAPS", "BlockFn", "BlockingTap", "CallbackTap", "MicTap", "import_sounddevice"]
