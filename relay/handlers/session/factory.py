"""Selects the dispatcher matching the configured upstream backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .done import DoneSignal
from .local import LocalPipelineDispatcher
from .dispatch import SessionDispatcher
from .realtime import RealtimeDispatcher
from ...upstream.local import LocalPipelineClient
from ...upstream.realtime import RealtimeClient

if TYPE_CHECKING:
    from ..websocket.writer import SessionWriter
    from ...runtime.dependencies import RuntimeDeps


def build_dispatcher(
    runtime_deps: RuntimeDeps,
    *,
    writer: SessionWriter,
    done: DoneSignal,
) -> SessionDispatcher:
    backend = runtime_deps.backend
    if isinstance(backend, LocalPipelineClient):
        return LocalPipelineDispatcher(
            backend,
            system_prompt=runtime_deps.system_prompt,
            writer=writer,
            done=done,
        )
    if isinstance(backend, RealtimeClient):
        return RealtimeDispatcher(
            backend,
            model=runtime_deps.settings.realtime_model,
            system_prompt=runtime_deps.system_prompt,
            writer=writer,
            done=done,
            strict_single_flight=runtime_deps.settings.strict_single_flight,
        )
    raise TypeError(f"unsupported upstream backend: {type(backend).__name__}")


__all__ = ["build_dispatcher"]
