"""Runtime package.

Keep this module dependency-light: importing `chief_relay.runtime.*` from the
CLI and unit tests should not require an audio device or network access.
"""

__all__: list[str] = []
