"""
Cache interfaces for the file cache.

This module defines the interface for disk-backed file caches:
- IFileCache: filename-keyed storage of raw bytes, JSON encoded values and
  pickled object graphs under one cache folder
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, Optional, Type, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from cachekit.cache.result import ReadResult

T = TypeVar("T")

Completion = Optional[Callable[[], None]]


class IFileCache(ABC):
    """
    Abstract interface for filename-keyed disk caches.

    Each instance owns one subfolder. Reads return None for anything that is
    not there, writes replace the whole file, and failures are logged rather
    than raised.

    Implementations:
        - FileCache: per-instance worker thread for asynchronous writes

    Example:
        ```python
        cache = FileCache("ProfileStore", Directory.DOCUMENT)

        # Queue a write and wait for it
        cache.encode(profile, "profile.json").result()

        # Read it back
        profile = cache.decode("profile.json", Profile)
        if profile is None:
            profile = fetch_profile()
        ```
    """

    @property
    @abstractmethod
    def subfolder(self) -> Path:
        """The folder holding every entry of this cache."""
        pass

    @abstractmethod
    def get_data(self, filename: str) -> Optional[bytes]:
        """
        Read raw bytes.

        Args:
            filename: The entry name

        Returns:
            The file content, or None if the entry does not exist
        """
        pass

    @abstractmethod
    def unarchive_data(self, filename: str) -> Optional[Any]:
        """
        Read a pickled object graph.

        Args:
            filename: The entry name

        Returns:
            The unpickled object, or None if missing or unreadable
        """
        pass

    @abstractmethod
    def decode(self, filename: str, type_: Type[T]) -> Optional[T]:
        """
        Read a JSON encoded value.

        Args:
            filename: The entry name
            type_: The type to validate the JSON payload into

        Returns:
            The decoded value, or None if missing or undecodable
        """
        pass

    @abstractmethod
    def load(self, filename: str, type_: Type[T]) -> "ReadResult[T]":
        """
        Read a JSON encoded value, keeping track of why nothing came back.

        Returns:
            ReadResult with status OK, NOT_FOUND or FAILED
        """
        pass

    @abstractmethod
    def save(
        self,
        data: bytes,
        filename: str,
        is_asynchronous: bool = True,
        completion: Completion = None,
    ) -> "Future[None]":
        """
        Replace an entry with raw bytes.

        Args:
            data: The bytes to store
            filename: The entry name
            is_asynchronous: Queue the write (True) or write on the calling
                thread before returning (False)
            completion: Called once the write attempt is over

        Returns:
            A future resolved when the write attempt is over
        """
        pass

    @abstractmethod
    def archive(self, value: Any, filename: str, completion: Completion = None) -> "Future[None]":
        """Queue a pickled write of ``value``."""
        pass

    @abstractmethod
    def encode(self, value: Any, filename: str, completion: Completion = None) -> "Future[None]":
        """Queue a JSON encoded write of ``value``."""
        pass

    @abstractmethod
    def delete(self, filename: str) -> None:
        """Delete an entry if it exists."""
        pass

    @abstractmethod
    def remove_if_file_exists(self, path: Optional[Path]) -> None:
        """Delete the file or folder at ``path`` if it exists."""
        pass

    @abstractmethod
    def file_exists(self, path: Path) -> bool:
        """Return True if a file exists at ``path``."""
        pass

    @abstractmethod
    def remove_folder_content(self, folder_path: Optional[Path] = None) -> None:
        """Delete every direct child of ``folder_path``."""
        pass

    @abstractmethod
    def get_file_path(self, filename: str) -> Path:
        """Return the full path of an entry."""
        pass
