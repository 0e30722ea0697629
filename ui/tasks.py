"""Schedule UI coroutines on the running (qasync) event loop."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional, Set

LOGGER = logging.getLogger(__name__)

DoneCallback = Callable[[Optional[BaseException]], None]


class TaskRunner:
    """Run action coroutines without blocking the caller.

    With a running loop each coroutine becomes a task that is kept referenced
    until it finishes; ``on_done`` receives its exception or ``None``. Without
    one the coroutine runs to completion via ``asyncio.run``.
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def run(self, coro: Coroutine[Any, Any, None], on_done: DoneCallback) -> Optional[asyncio.Task[Any]]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                asyncio.run(coro)
            except Exception as exc:
                on_done(exc)
            else:
                on_done(None)
            return None

        task = loop.create_task(coro)
        self._tasks.add(task)

        def _finished(done: asyncio.Task[Any]) -> None:
            self._tasks.discard(done)
            if done.cancelled():
                LOGGER.info("Action cancelled")
                on_done(asyncio.CancelledError())
                return
            on_done(done.exception())

        task.add_done_callback(_finished)
        return task
