"""
Timer-based debouncing for high-frequency triggers such as resize events.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Run ``func`` once a burst of triggers has been quiet for ``wait`` seconds.

    Every trigger cancels the pending timer and schedules a new one, so at most
    one call is ever pending. The latest trigger's arguments are used.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float = 0.05,
        *,
        timer_factory: Callable[..., Any] = threading.Timer,
    ) -> None:
        self.func = func
        self.wait = wait
        self._timer_factory = timer_factory
        self._timer: Optional[Any] = None
        self._pending_args: tuple = ()
        self._pending_kwargs: dict = {}
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending_args = args
            self._pending_kwargs = kwargs
            timer = self._timer_factory(self.wait, lambda: self._fire(timer))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, timer: Any) -> Any:
        with self._lock:
            if self._timer is not timer:
                return None
            self._timer = None
            args, kwargs = self._pending_args, self._pending_kwargs
        return self.func(*args, **kwargs)

    def flush(self) -> Any:
        """Run the pending call now, if there is one, and return its result."""
        with self._lock:
            timer = self._timer
            if timer is None:
                return None
            timer.cancel()
            self._timer = None
            args, kwargs = self._pending_args, self._pending_kwargs
        return self.func(*args, **kwargs)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                logger.debug("Cancelled pending debounced call to %s", getattr(self.func, "__name__", self.func))
            self._timer = None
