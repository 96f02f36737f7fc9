"""Fire-and-forget execution of cache writes and usage tracking."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

from grammarcheck_service_libs.logging_utils import create_service_logger

from services.grammar_check_service.protocols import BackgroundTaskRunnerProtocol

logger = create_service_logger("grammar_check_service.background_tasks")


class BackgroundTaskRunner(BackgroundTaskRunnerProtocol):
    """Holds strong references to detached tasks until they finish.

    A task failure is logged and counted; it never reaches the request that
    spawned it.
    """

    def __init__(self, metrics: dict[str, Any] | None = None):
        self.metrics = metrics
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._handle_task_result)

    def _handle_task_result(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return

        exception = task.exception()
        if exception is not None:
            logger.error(
                f"Background task '{task.get_name()}' failed: {exception}",
                exc_info=exception,
            )
            if self.metrics and "background_task_failures_total" in self.metrics:
                self.metrics["background_task_failures_total"].labels(task=task.get_name()).inc()

    async def drain(self, timeout_seconds: float) -> None:
        if not self._tasks:
            return

        logger.info(f"Waiting for {len(self._tasks)} background tasks to finish")
        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout_seconds)
        for task in still_running:
            task.cancel()
        if still_running:
            logger.warning(f"Cancelled {len(still_running)} background tasks at shutdown")
            await asyncio.gather(*still_running, return_exceptions=True)
