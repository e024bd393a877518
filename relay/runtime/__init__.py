"""Runtime dependency container and startup bootstrap."""

from .dependencies import RuntimeDeps, SessionSettings
from .bootstrap import build_runtime_deps

__all__ = ["RuntimeDeps", "SessionSettings", "build_runtime_deps"]
