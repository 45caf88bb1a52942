"""Deferred follow-up tasks."""

import asyncio
from typing import Awaitable, Callable, Protocol

from .logging_config import get_logger

logger = get_logger(__name__)

Job = Callable[[], Awaitable[object]]


class IScheduler(Protocol):
    """Runs a coroutine function after a delay."""

    def call_later(self, delay: float, job: Job) -> None:
        """Schedule job to run once after delay seconds."""
        ...

    def cancel_all(self) -> None:
        """Drop every job that has not run yet."""
        ...


class AsyncioScheduler:
    """Schedules jobs as background tasks on the running loop."""

    def __init__(self):
        self._tasks: set[asyncio.Task] = set()

    def call_later(self, delay: float, job: Job) -> None:
        task = asyncio.create_task(self._run(delay, job))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, delay: float, job: Job) -> None:
        try:
            await asyncio.sleep(delay)
            await job()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Scheduled job failed: %s", e, exc_info=True)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    @property
    def pending(self) -> int:
        return len(self._tasks)
