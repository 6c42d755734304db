# backend/farmops/services/dispatch.py

import asyncio
from typing import Awaitable, Optional, Set

from farmops.core.logger import get_logger

logger = get_logger("dispatch")


class BackgroundDispatcher:
    """
    Runs coroutines detached from the request that spawned them.

    Tasks are kept referenced until they finish so the event loop cannot
    garbage-collect them mid-flight. Nothing is retried.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Awaitable, name: Optional[str] = None) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        if name:
            task.set_name(name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Background task cancelled", extra={"task_name": task.get_name()})
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Background task failed",
                exc_info=(type(exc), exc, exc.__traceback__),
                extra={"task_name": task.get_name()},
            )

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for outstanding tasks, e.g. on shutdown."""
        if not self._tasks:
            return
        done, pending = await asyncio.wait(list(self._tasks), timeout=timeout)
        # let done-callbacks run before reporting
        await asyncio.sleep(0)
        if pending:
            logger.warning("Background tasks still running after drain", extra={"pending": len(pending)})
