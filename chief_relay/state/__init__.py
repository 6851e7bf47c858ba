from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import SessionPhase, RelaySessionState

__all__ = ["AppSettings", "RelaySessionState", "RuntimeDeps", "SessionPhase"]
