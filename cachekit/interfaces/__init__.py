"""
Interface definitions for cachekit.

This module provides abstract base classes (ABCs) that define the contracts
for the components in the library. Using interfaces enables:
- Better testability through mock implementations
- Clear documentation of component capabilities
- Dependency injection and substitution

Available Interfaces:
    IFileCache: Disk-backed file cache interface
    IDebouncer: Call coalescing interface
    ISynchronizedValue: Shared value container interface
"""

from cachekit.interfaces.cache import IFileCache
from cachekit.interfaces.debounce import IDebouncer
from cachekit.interfaces.sync import ISynchronizedValue

__all__ = [
    "IFileCache",
    "IDebouncer",
    "ISynchronizedValue",
]
