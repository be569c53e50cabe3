"""
Debouncer interface.

Defines the contract for objects that coalesce bursts of calls into a
single delayed callback.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Executor
from typing import Callable, Optional


class IDebouncer(ABC):
    """
    Abstract interface for a debouncer.

    Implementations:
        - Debouncer: threading.Timer based debouncer

    Example:
        ```python
        debouncer.callback = lambda: cache.save(payload, "state.json")
        for event in burst:
            debouncer.trigger()  # only the last call schedules the save
        ```
    """

    @property
    @abstractmethod
    def callback(self) -> Optional[Callable[[], None]]:
        """Callback invoked when the timer fires."""
        pass

    @callback.setter
    @abstractmethod
    def callback(self, value: Optional[Callable[[], None]]) -> None:
        pass

    @property
    @abstractmethod
    def caller_executor(self) -> Optional[Executor]:
        """Optional executor the callback is redirected to when it fires."""
        pass

    @caller_executor.setter
    @abstractmethod
    def caller_executor(self, value: Optional[Executor]) -> None:
        pass

    @abstractmethod
    def trigger(self) -> None:
        """
        Schedule the callback after the delay.

        Multiple calls drop the older pending firing and push the firing
        time back to ``now + delay``.
        """
        pass
