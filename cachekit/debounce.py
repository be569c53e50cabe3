"""
Debouncer that coalesces bursts of calls into a single delayed callback.

Every ``trigger()`` drops the pending firing and schedules a new one
``delay`` seconds later, so a burst of calls produces exactly one callback,
``delay`` after the last call.
"""

import asyncio
import logging
import threading
import weakref
from concurrent.futures import Executor
from typing import Callable, Optional, TYPE_CHECKING

from cachekit.interfaces.debounce import IDebouncer

if TYPE_CHECKING:
    from cachekit.config.cache_config import DebounceConfig

logger = logging.getLogger(__name__)


class _PendingFire:
    """One scheduled firing: the timer plus the handler it will run."""

    __slots__ = ("timer", "handler")

    def __init__(self) -> None:
        self.timer: Optional[threading.Timer] = None
        self.handler: Optional[Callable[[], None]] = None

    def run(self) -> None:
        handler = self.handler
        if handler is not None:
            handler()

    def cancel(self) -> None:
        # Clear the handler first so a timer thread that already woke up
        # finds nothing to run, then stop the timer.
        self.handler = None
        if self.timer is not None:
            self.timer.cancel()


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Debouncer(IDebouncer):
    """
    Coalesce rapid calls into a single callback after a quiet period.

    Implements the IDebouncer interface.

    The firing runs on ``caller_executor`` when one is set. Otherwise, if
    ``trigger()`` was called from a thread running an asyncio event loop,
    the callback is handed back to that loop; if not, it runs on the timer
    thread.

    Timers only hold a weak reference to the debouncer: once the debouncer
    is garbage-collected, pending firings do nothing.

    Attributes:
        delay: Quiet period in seconds, fixed at construction

    Example:
        >>> debouncer = Debouncer(delay=0.2, callback=lambda: print("saved"))
        >>> for _ in range(5):
        ...     debouncer.trigger()
        >>> # "saved" is printed once, 0.2s after the last trigger
    """

    def __init__(
        self,
        delay: float,
        caller_executor: Optional[Executor] = None,
        callback: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the debouncer.

        Args:
            delay: Quiet period in seconds before the callback fires
            caller_executor: Optional executor the callback is submitted to
            callback: Optional callback; can also be set later
        """
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self._callback = callback
        self._caller_executor = caller_executor
        self._pending: Optional[_PendingFire] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: "DebounceConfig",
        caller_executor: Optional[Executor] = None,
        callback: Optional[Callable[[], None]] = None,
    ) -> "Debouncer":
        """Create a debouncer using the configured delay."""
        return cls(config.delay, caller_executor=caller_executor, callback=callback)

    @property
    def callback(self) -> Optional[Callable[[], None]]:
        return self._callback

    @callback.setter
    def callback(self, value: Optional[Callable[[], None]]) -> None:
        self._callback = value

    @property
    def caller_executor(self) -> Optional[Executor]:
        return self._caller_executor

    @caller_executor.setter
    def caller_executor(self, value: Optional[Executor]) -> None:
        self._caller_executor = value

    @property
    def pending(self) -> bool:
        """Return True while a firing is scheduled."""
        with self._lock:
            return self._pending is not None

    def trigger(self) -> None:
        """Schedule (or reschedule) the callback ``delay`` seconds from now.

        Does nothing beyond cancelling the previous firing when no callback
        is set.
        """
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
                logger.debug("Debounce reset")

            if self._callback is None:
                return

            pending = _PendingFire()
            pending.handler = _make_handler(
                weakref.ref(self),
                pending,
                self._caller_executor,
                _running_loop(),
            )
            timer = threading.Timer(self.delay, pending.run)
            timer.daemon = True
            pending.timer = timer
            self._pending = pending
            timer.start()

    call = trigger

    def cancel(self) -> None:
        """Drop the pending firing, if any."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
                logger.debug("Debounce cancelled")

    def flush(self) -> bool:
        """Run a pending firing now on the calling thread.

        Returns:
            True if a firing was pending and the callback was run
        """
        with self._lock:
            pending = self._pending
            if pending is None:
                return False
            pending.cancel()
            self._pending = None
        self._invoke()
        return True

    def _claim(self, pending: _PendingFire) -> bool:
        """Clear ``pending`` if it is still the current firing."""
        with self._lock:
            if self._pending is not pending:
                return False
            self._pending = None
            return True

    def _invoke(self) -> None:
        callback = self._callback
        if callback is None:
            return
        logger.debug("Debounce fired")
        try:
            callback()
        except Exception:
            logger.exception("Debounce callback failed")


def _make_handler(
    ref: "weakref.ref[Debouncer]",
    pending: _PendingFire,
    executor: Optional[Executor],
    loop: Optional[asyncio.AbstractEventLoop],
) -> Callable[[], None]:
    """Build the timer handler without keeping the debouncer alive."""

    def handler() -> None:
        debouncer = ref()
        if debouncer is None or not debouncer._claim(pending):
            return

        try:
            if executor is not None:
                executor.submit(debouncer._invoke)
            elif loop is not None:
                loop.call_soon_threadsafe(debouncer._invoke)
            else:
                debouncer._invoke()
        except RuntimeError:
            # Executor shut down or loop closed between trigger and firing
            logger.warning("Debounce target is gone; callback dropped")

    return handler
