"""
Synchronized value interface.

Defines the contract for containers that give concurrent callers safe
access to one shared value.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

V = TypeVar("V")
T = TypeVar("T")


class ISynchronizedValue(ABC, Generic[V]):
    """
    Abstract interface for a value shared across threads.

    Implementations:
        - SynchronizedValue: reader/writer lock over a single value

    Type Parameters:
        V: The type of the wrapped value
    """

    @abstractmethod
    def read(self) -> V:
        """
        Return a snapshot of the current value.

        Concurrent reads do not block each other; a read only waits for a
        write in progress.
        """
        pass

    @abstractmethod
    def modify(self, transform: Callable[[Any], T]) -> T:
        """
        Run ``transform`` with exclusive access to the value.

        Args:
            transform: Callable receiving an in/out slot for the value

        Returns:
            The result of ``transform``
        """
        pass
