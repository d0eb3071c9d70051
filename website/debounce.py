import asyncio
import inspect
import logging
from typing import Callable, Optional

from .tasks import spawn

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Delay a callback until input has been quiet for ``delay`` seconds.

    Each ``schedule`` cancels whatever is still pending, so only the last call
    in a burst fires. One instance per input source; sharing an instance
    between unrelated inputs makes them cancel each other.
    Must be used from inside a running event loop.
    """

    def __init__(self, delay: float = 0.3):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable, *args, delay: Optional[float] = None) -> asyncio.TimerHandle:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(
            self.delay if delay is None else delay, self._fire, callback, args
        )
        return self._handle

    def cancel(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, callback: Callable, args: tuple) -> None:
        self._handle = None
        try:
            result = callback(*args)
        except Exception:
            logger.exception("Debounced callback %r failed", callback)
            return
        if inspect.isawaitable(result):
            spawn(result)
