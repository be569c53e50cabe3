"""cachekit: disk file cache, debouncer and synchronized value helpers."""

from cachekit.cache import AsyncFileCache, Directory, FileCache, ReadResult, ReadStatus
from cachekit.debounce import Debouncer
from cachekit.sync import ReadWriteLock, SynchronizedValue, ValueSlot

__version__ = "0.1.0"

__all__ = [
    "AsyncFileCache",
    "Directory",
    "FileCache",
    "ReadResult",
    "ReadStatus",
    "Debouncer",
    "ReadWriteLock",
    "SynchronizedValue",
    "ValueSlot",
]
