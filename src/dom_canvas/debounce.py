"""Debouncer: collapse bursts of calls into one call after a quiet window.

Every ``call()`` cancels the pending timer and starts a new one, so only the
last call of a burst runs; earlier calls are dropped, not queued.  Timers come
from a ``Scheduler`` (anything with ``call_later``); by default the running
``asyncio`` loop, resolved when ``call()`` is made.  With neither an injected
scheduler nor a running loop there is no timer source, so the call runs
immediately.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from dom_canvas.protocols import Scheduler, TimerHandle

__all__ = ["Debouncer"]

logger = logging.getLogger(__name__)


class Debouncer:
    """Time-debounce for a single-threaded event loop.

    Args:
        delay:     Quiet window in seconds.
        scheduler: Timer source.  Defaults to ``asyncio.get_running_loop()``
                   at call time.  Without a running loop
                   calls run immediately instead of waiting.

    Example::

        debounce = Debouncer(0.01, scheduler=loop)
        for x in range(100):
            debounce.call(on_move, x, 0)   # only on_move(99, 0) runs
    """

    def __init__(self, delay: float, scheduler: Scheduler | None = None) -> None:
        if delay < 0.0:
            msg = f"delay must be >= 0, got {delay}"
            raise ValueError(msg)
        self._delay = delay
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None
        self._pending: tuple[Callable[..., Any], tuple[Any, ...]] | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a call is waiting for its window to elapse."""
        return self._pending is not None

    def call(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule ``fn(*args)``, replacing any call still waiting."""
        self.cancel()
        scheduler = self._resolve_scheduler()
        if scheduler is None:
            fn(*args)
            return
        self._pending = (fn, args)
        self._handle = scheduler.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        """Drop the waiting call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def flush(self) -> Any:
        """Run the waiting call now and return its result (None if idle)."""
        pending = self._pending
        self.cancel()
        if pending is None:
            return None
        fn, args = pending
        return fn(*args)

    def _resolve_scheduler(self) -> Scheduler | None:
        if self._scheduler is not None:
            return self._scheduler
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; calling through without debounce")
            return None

    def _fire(self) -> None:
        pending = self._pending
        self._handle = None
        self._pending = None
        if pending is not None:
            fn, args = pending
            fn(*args)
