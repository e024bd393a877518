"""Background task helpers."""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


async def cancel_task(task: asyncio.Task | None) -> None:
    """Cancel an asyncio task and await its completion.

    Safe for None and already-completed tasks. Cancellation of the caller
    itself still propagates. Must not be awaited from inside ``task``.
    """
    if not task or task.done():
        return
    logger.debug("cancelling task %s", task.get_name())
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        current = asyncio.current_task()
        if current is not None and current.cancelling():
            raise
    except Exception:  # noqa: BLE001
        logger.debug("task %s raised while cancelling", task.get_name(), exc_info=True)


__all__ = ["cancel_task"]
