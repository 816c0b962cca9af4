"""Cancellable scope for asyncio work tied to a UI element's lifetime."""

import asyncio
from typing import Callable, Coroutine, Optional

import structlog

logger = structlog.get_logger(source="lifecycle_scope")


class LifecycleScope:
    """Tracks tasks launched on behalf of an owner and cancels them on teardown.

    Close callbacks run once, in reverse registration order, when the scope
    is cancelled. Work launched after cancellation never starts.
    """

    def __init__(self, name: str = "scope"):
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._close_callbacks: list[Callable[[], None]] = []
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active_tasks(self) -> int:
        return len(self._tasks)

    def launch(self, coro: Coroutine) -> Optional[asyncio.Task]:
        """Schedule a coroutine on the running loop, owned by this scope.

        Returns None (and closes the coroutine) if the scope is already cancelled.
        """
        if self._cancelled:
            logger.debug("launch_after_cancel", scope=self.name)
            coro.close()
            return None
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register a teardown callback. Runs immediately if already cancelled."""
        if self._cancelled:
            callback()
            return
        self._close_callbacks.append(callback)

    def cancel(self) -> None:
        """Cancel outstanding tasks and run close callbacks. Idempotent."""
        if self._cancelled:
            return
        self._cancelled = True

        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        logger.debug("scope_cancelled", scope=self.name, cancelled_tasks=len(pending))

        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in reversed(callbacks):
            try:
                callback()
            except Exception:
                logger.exception("close_callback_failed", scope=self.name)

    async def wait(self) -> None:
        """Wait until every task launched so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
