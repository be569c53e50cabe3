"""Thread-safe container for a single shared value."""

from typing import Callable, Generic, TypeVar

from cachekit.interfaces.sync import ISynchronizedValue
from cachekit.sync.rwlock import ReadWriteLock

V = TypeVar("V")
T = TypeVar("T")


class ValueSlot(Generic[V]):
    """In/out handle passed to a ``modify`` transform.

    Mutate ``slot.value`` in place or assign a new object to it; whatever it
    holds when the transform returns (or raises) becomes the stored value.
    """

    __slots__ = ("value",)

    def __init__(self, value: V):
        self.value = value

    def __repr__(self) -> str:
        return f"ValueSlot({self.value!r})"


class SynchronizedValue(ISynchronizedValue[V]):
    """
    Guard one value with reader/writer exclusion.

    Implements the ISynchronizedValue interface.

    Reads take the shared side of a ReadWriteLock and may run concurrently
    with other reads. Writes take the exclusive side of the same lock, so no
    reader ever sees a value mid-mutation. Keep transforms short: while one
    runs, every reader waits. The lock is not reentrant, so a transform must
    not call back into the same container.

    Example:
        >>> counter = SynchronizedValue(0)
        >>> counter.modify(lambda slot: setattr(slot, "value", slot.value + 1))
        >>> counter.read()
        1
        >>> counter.update(lambda n: n * 10)
        10
        >>> items = SynchronizedValue([])
        >>> items.modify(lambda slot: slot.value.append("a"))
        >>> items.value
        ['a']
    """

    def __init__(self, value: V):
        self._value = value
        self._lock = ReadWriteLock()

    def read(self) -> V:
        """Return the current value under shared access."""
        with self._lock.read_locked():
            return self._value

    @property
    def value(self) -> V:
        return self.read()

    def modify(self, transform: Callable[[ValueSlot[V]], T]) -> T:
        """
        Run ``transform`` with exclusive access and return its result.

        Args:
            transform: Callable receiving a ValueSlot wrapping the current
                value. It may mutate ``slot.value`` in place or reassign it.

        Returns:
            Whatever ``transform`` returns

        Raises:
            Any exception raised by ``transform``. Changes already made to
            the slot are kept; the transform is responsible for leaving the
            value valid on its own failure path.
        """
        with self._lock.write_locked():
            slot = ValueSlot(self._value)
            try:
                return transform(slot)
            finally:
                self._value = slot.value

    def update(self, fn: Callable[[V], V]) -> V:
        """Replace the value with ``fn(old)`` atomically and return the new value."""
        with self._lock.write_locked():
            self._value = fn(self._value)
            return self._value

    def set(self, value: V) -> None:
        with self._lock.write_locked():
            self._value = value

    def __repr__(self) -> str:
        return f"SynchronizedValue({self.read()!r})"
