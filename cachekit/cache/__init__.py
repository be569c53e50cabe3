"""Cache package for cachekit.

Provides a filename-keyed disk cache with synchronous, queued and asyncio
access.
"""

from cachekit.cache.directory import Directory
from cachekit.cache.result import ReadResult, ReadStatus
from cachekit.cache.file_cache import FileCache
from cachekit.cache.async_cache import AsyncFileCache

__all__ = [
    "Directory",
    "ReadResult",
    "ReadStatus",
    "FileCache",
    "AsyncFileCache",
]
