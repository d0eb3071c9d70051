import asyncio
import inspect
import logging
from typing import Awaitable

logger = logging.getLogger(__name__)


class CancelToken:
    """Handed to an async action so a newer action can supersede it."""

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self):
        return f"<CancelToken cancelled={self.cancelled}>"


def spawn(awaitable: Awaitable) -> asyncio.Future:
    """Schedule ``awaitable`` on the running loop and log it if it fails."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise
    task = asyncio.ensure_future(awaitable, loop=loop)
    task.add_done_callback(_log_failure)
    return task


def _log_failure(task: asyncio.Future) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Background task failed", exc_info=(type(exc), exc, exc.__traceback__))
