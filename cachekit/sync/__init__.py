"""Synchronization primitives for cachekit."""

from cachekit.sync.rwlock import ReadWriteLock
from cachekit.sync.synchronized import SynchronizedValue, ValueSlot

__all__ = [
    "ReadWriteLock",
    "SynchronizedValue",
    "ValueSlot",
]
