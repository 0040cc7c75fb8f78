"""Keyed, cancellable delayed tasks."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

type Sleep = Callable[[float], Awaitable[None]]


class KeyedTaskScheduler:
    """Runs callbacks after a delay, grouped by key so they can be cancelled together.

    Tasks drop out of the scheduler when they finish. ``cancel_all`` is the
    teardown boundary: nothing scheduled before it runs afterwards.
    """

    def __init__(self, sleep: Sleep = asyncio.sleep) -> None:
        self._sleep = sleep
        self._tasks: defaultdict[str, set[asyncio.Task]] = defaultdict(set)

    def schedule(self, key: str, delay: float, callback: Callable[[], None]) -> asyncio.Task:
        """Run ``callback`` after ``delay`` seconds under ``key``."""

        async def run_later() -> None:
            await self._sleep(delay)
            callback()

        task = asyncio.create_task(run_later(), name=f"{key}+{delay}s")
        self._tasks[key].add(task)
        task.add_done_callback(lambda t: self._forget(key, t))
        return task

    def pending(self, key: str) -> int:
        return sum(1 for task in self._tasks.get(key, ()) if not task.done())

    def cancel(self, key: str) -> None:
        for task in self._tasks.pop(key, set()):
            task.cancel()

    def cancel_all(self) -> None:
        for key in list(self._tasks):
            self.cancel(key)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        tasks = self._tasks.get(key)
        if tasks is None:
            return
        tasks.discard(task)
        if not tasks:
            del self._tasks[key]
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Scheduled task {task.get_name()} failed", exc_info=task.exception())
