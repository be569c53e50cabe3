"""
asyncio facade over FileCache.

Reads and writes go through aiofiles so coroutines never block the event
loop on disk I/O. Paths, serialization and the soft-failure policy are the
same as FileCache's; both can be used on the same folder.
"""

import uuid
from pathlib import Path
from typing import Any, Optional, Type, TypeVar

import aiofiles
import aiofiles.os

from cachekit.cache import serializers
from cachekit.cache.file_cache import TEMP_SUFFIX, FileCache
from cachekit.cache.result import ReadResult
from cachekit.exceptions import CacheReadException, SerializationException


T = TypeVar("T")


class AsyncFileCache:
    """
    Async access to the entries of a FileCache.

    Example:
        >>> cache = AsyncFileCache(FileCache("Feed", Directory.CACHE))
        >>> await cache.encode({"items": [1, 2]}, "feed.json")
        >>> await cache.decode("feed.json", dict)
        {'items': [1, 2]}
    """

    def __init__(self, file_cache: FileCache):
        self._cache = file_cache
        self._log = file_cache.diagnostics

    @property
    def file_cache(self) -> FileCache:
        return self._cache

    async def file_exists(self, path: Path) -> bool:
        return await aiofiles.os.path.exists(path)

    async def get_data(self, filename: str) -> Optional[bytes]:
        """Read raw bytes, or None if the entry is missing or unreadable."""
        return (await self._read(filename)).value

    async def decode(self, filename: str, type_: Type[T]) -> Optional[T]:
        """Read a JSON entry, or None if missing or undecodable."""
        return (await self.load(filename, type_)).value

    async def load(self, filename: str, type_: Type[T]) -> ReadResult[T]:
        raw = await self._read(filename)
        if not raw.is_ok:
            return raw  # type: ignore[return-value]
        try:
            return ReadResult.ok(serializers.from_json(raw.value, type_))
        except SerializationException as e:
            self._log.warning(f"AsyncFileCache decode error for {filename}: {e.message}")
            return ReadResult.failed(e)

    async def save(self, data: bytes, filename: str) -> bool:
        """
        Replace an entry with raw bytes.

        Returns:
            True if the entry was written, False if the write failed (logged)
        """
        return await self._write_data(self._cache.get_file_path(filename), data)

    async def encode(self, value: Any, filename: str) -> bool:
        """
        Replace an entry with the JSON encoding of ``value``.

        Returns:
            True if the entry was written, False if encoding or the write
            failed (logged)
        """
        try:
            data = serializers.to_json(value)
        except SerializationException as e:
            self._log.error(f"AsyncFileCache save failed for {filename}: {e.message}")
            return False
        return await self._write_data(self._cache.get_file_path(filename), data)

    async def delete(self, filename: str) -> None:
        path = self._cache.get_file_path(filename)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self._log.warning(f"AsyncFileCache error in removing file: {e} in path: {path}")

    async def _read(self, filename: str) -> ReadResult[bytes]:
        path = self._cache.get_file_path(filename)
        try:
            async with aiofiles.open(path, mode="rb") as f:
                return ReadResult.ok(await f.read())
        except (FileNotFoundError, IsADirectoryError):
            return ReadResult.not_found()
        except OSError as e:
            self._log.warning(f"AsyncFileCache read error: {e} in path: {path}")
            return ReadResult.failed(CacheReadException(str(e), details={"path": str(path)}))

    async def _write_data(self, path: Path, data: bytes) -> bool:
        tmp_path = path.parent / f".{path.name}.{uuid.uuid4().hex}{TEMP_SUFFIX}"
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, mode="wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, path)
            return True
        except OSError as e:
            self._log.error(f"AsyncFileCache error in saving: {e} into path: {path}")
            try:
                await aiofiles.os.remove(tmp_path)
            except OSError:
                pass
            return False
