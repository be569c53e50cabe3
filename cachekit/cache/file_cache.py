"""
Disk-backed file cache keyed by filename.

This module provides the FileCache class that stores raw bytes, JSON encoded
values and pickled object graphs under one folder per cache instance:

    <scope root>/<root folder>/<folder name>/<filename>

It is a best-effort cache. Failures to create the folder, read, write,
serialize or delete are logged and absorbed so the host application sees
"nothing cached" instead of an exception.
"""

import logging
import os
import shutil
import tempfile
import weakref
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Optional, Type, TypeVar, Union

from cachekit.cache import serializers
from cachekit.cache.directory import Directory, default_file_cache_config
from cachekit.cache.result import ReadResult
from cachekit.config.cache_config import FileCacheConfig
from cachekit.exceptions import (
    CacheDirectoryException,
    CacheReadException,
    CacheWriteException,
    SerializationException,
)
from cachekit.interfaces.cache import IFileCache

logger = logging.getLogger(__name__)

T = TypeVar("T")

Completion = Optional[Callable[[], None]]

TEMP_SUFFIX = ".tmp"


def _done_future() -> "Future[None]":
    future: "Future[None]" = Future()
    future.set_result(None)
    return future


def _run_completion(completion: Completion, sink: logging.Logger) -> None:
    if completion is None:
        return
    try:
        completion()
    except Exception:
        sink.exception("FileCache completion callback failed")


class FileCache(IFileCache):
    """
    Store and retrieve named files under a per-instance cache folder.

    Implements the IFileCache interface.

    Asynchronous writes (``save(..., is_asynchronous=True)``, ``archive``,
    ``encode``) are queued on a single worker thread owned by this instance,
    so two queued writes to the same filename land in the order they were
    issued. A synchronous write runs on the calling thread and has no
    ordering guarantee relative to queued ones.

    Queued jobs only hold a weak reference to the cache. If the cache has
    been garbage-collected by the time a job runs, the job does nothing.

    Every write goes to a temporary file in the cache folder which then
    replaces the target with ``os.replace``, so readers never see a half
    written entry.

    Attributes:
        folder_name: The caller-chosen folder under the root folder
        directory: The storage scope (DOCUMENT or CACHE)

    Example:
        >>> cache = FileCache("ProfileStore", Directory.DOCUMENT)
        >>>
        >>> # Queue a write and block until it is on disk
        >>> cache.save(b"raw bytes", "blob.bin").result()
        >>> cache.get_data("blob.bin")
        b'raw bytes'
        >>>
        >>> # JSON values round-trip through pydantic
        >>> cache.encode({"name": "Ada"}, "profile.json").result()
        >>> cache.decode("profile.json", dict)
        {'name': 'Ada'}
        >>>
        >>> cache.delete("profile.json")
        >>> cache.decode("profile.json", dict) is None
        True
    """

    def __init__(
        self,
        folder_name: str,
        directory: Union[Directory, str] = Directory.CACHE,
        *,
        config: Optional[FileCacheConfig] = None,
        diagnostics: Optional[logging.Logger] = None,
    ):
        """
        Initialize the cache and create its folder if needed.

        Args:
            folder_name: Unique folder name for this cache. Prefix it with the
                owning component's name; two caches sharing a folder race.
            directory: Storage scope. Defaults to Directory.CACHE.
            config: Storage roots and root folder name. Defaults to the
                configuration built from environment settings.
            diagnostics: Logger receiving soft failures. Defaults to this
                module's logger.

        Note:
            A folder that cannot be created is logged, not raised; the cache
            then behaves as if it were always empty.
        """
        self.folder_name = folder_name
        self.directory = Directory(directory)
        self._config = config if config is not None else default_file_cache_config()
        self._logger = diagnostics if diagnostics is not None else logger
        self._subfolder = (
            self.directory.root(self._config) / self._config.root_folder / folder_name
        )
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=f"cachekit-{folder_name}",
        )
        self._create_directory()

    @property
    def subfolder(self) -> Path:
        return self._subfolder

    @property
    def diagnostics(self) -> logging.Logger:
        """Logger receiving this cache's soft failures."""
        return self._logger

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_data(self, filename: str) -> Optional[bytes]:
        """
        Read the raw bytes of an entry.

        Args:
            filename: The entry name

        Returns:
            The file content, or None if the entry does not exist or could
            not be read
        """
        return self._read(filename).value

    def unarchive_data(self, filename: str) -> Optional[Any]:
        """
        Read a pickled object graph written by ``archive``.

        Returns:
            The unpickled object, or None if missing or unreadable
        """
        result = self._read(filename)
        if not result.is_ok:
            return None
        try:
            return serializers.from_archive(result.value)
        except SerializationException as e:
            self._logger.warning(f"FileCache unarchive error for {filename}: {e.message}")
            return None

    def decode(self, filename: str, type_: Type[T]) -> Optional[T]:
        """
        Read a JSON entry written by ``encode``.

        A missing file and an undecodable file both come back as None; use
        ``load`` to tell them apart.

        Args:
            filename: The entry name
            type_: Type to validate the payload into (BaseModel, dataclass,
                dict, list[int], ...)

        Returns:
            The decoded value, or None
        """
        return self.load(filename, type_).value

    def load(self, filename: str, type_: Type[T]) -> ReadResult[T]:
        """
        Read a JSON entry and report why nothing came back.

        Returns:
            ReadResult.ok(value), ReadResult.not_found(), or
            ReadResult.failed(error) for read and decode errors
        """
        raw = self._read(filename)
        if not raw.is_ok:
            return raw  # type: ignore[return-value]
        try:
            return ReadResult.ok(serializers.from_json(raw.value, type_))
        except SerializationException as e:
            self._logger.warning(f"FileCache decode error for {filename}: {e.message}")
            return ReadResult.failed(e)

    def _read(self, filename: str) -> ReadResult[bytes]:
        path = self.get_file_path(filename)
        if not path.is_file():
            return ReadResult.not_found()
        try:
            return ReadResult.ok(path.read_bytes())
        except FileNotFoundError:
            # Deleted between the check and the read
            return ReadResult.not_found()
        except OSError as e:
            self._logger.warning(f"FileCache read error: {e} in path: {path}")
            return ReadResult.failed(
                CacheReadException(str(e), details={"path": str(path)})
            )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

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
            data: The bytes to store verbatim
            filename: The entry name
            is_asynchronous: If True (default) the write is queued on this
                cache's worker thread and the call returns immediately. If
                False the write happens on the calling thread.
            completion: Called once the write attempt is over, on the worker
                thread for queued writes, before returning otherwise

        Returns:
            A future resolved when the write attempt is over (already done
            for synchronous writes)
        """
        if is_asynchronous:
            return self._submit(lambda cache: cache._save_operation(data, filename), completion)

        self._save_operation(data, filename)
        self._run_completion(completion)
        return _done_future()

    def archive(self, value: Any, filename: str, completion: Completion = None) -> "Future[None]":
        """
        Queue a pickled write of ``value``.

        The value is pickled on the worker thread; a pickling failure is
        logged, nothing is written, and ``completion`` still fires.
        """
        return self._submit(
            lambda cache: cache._serialize_and_save(serializers.to_archive, value, filename),
            completion,
        )

    def encode(self, value: Any, filename: str, completion: Completion = None) -> "Future[None]":
        """
        Queue a JSON encoded write of ``value``.

        The value is encoded on the worker thread; an encoding failure is
        logged, nothing is written, and ``completion`` still fires.
        """
        return self._submit(
            lambda cache: cache._serialize_and_save(serializers.to_json, value, filename),
            completion,
        )

    def _serialize_and_save(
        self,
        serializer: Callable[[Any], bytes],
        value: Any,
        filename: str,
    ) -> None:
        try:
            data = serializer(value)
        except SerializationException as e:
            self._logger.error(f"FileCache save failed for {filename}: {e.message}")
            return
        self._save_operation(data, filename)

    def _save_operation(self, data: bytes, filename: str) -> None:
        self._write_data(self.get_file_path(filename), data)

    def _write_data(self, path: Path, data: bytes) -> None:
        """Write ``data`` next to ``path`` and move it into place."""
        tmp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=TEMP_SUFFIX,
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            error = CacheWriteException(str(e), details={"path": str(path)})
            self._logger.error(f"FileCache error in saving: {error.message} into path: {path}")
        finally:
            if tmp_name is not None:
                self._discard(Path(tmp_name))

    def _discard(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError:
            pass

    # ------------------------------------------------------------------
    # Deletes and paths
    # ------------------------------------------------------------------

    def delete(self, filename: str) -> None:
        """Delete an entry if it exists. Deleting a missing entry is a no-op."""
        self.remove_if_file_exists(self.get_file_path(filename))

    def remove_if_file_exists(self, path: Optional[Path]) -> None:
        """
        Delete the file or folder at ``path`` if it exists.

        Args:
            path: Absolute path of the item. None is ignored. A folder is
                removed with everything inside it.

        Note:
            Removal errors are logged, never raised.
        """
        if path is None:
            return
        path = Path(path)
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink(missing_ok=True)
        except OSError as e:
            self._logger.warning(f"FileCache error in removing file: {e} in path: {path}")

    def file_exists(self, path: Path) -> bool:
        return Path(path).exists()

    def remove_folder_content(self, folder_path: Optional[Path] = None) -> None:
        """
        Delete every direct child of a folder, files and subfolders alike.

        Args:
            folder_path: The folder to empty. Defaults to this cache's folder.

        Note:
            If the folder cannot be listed this is a silent no-op.
        """
        folder = Path(folder_path) if folder_path is not None else self._subfolder
        try:
            children = list(folder.iterdir())
        except OSError:
            return
        for child in children:
            try:
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            except OSError as e:
                self._logger.debug(f"FileCache could not remove {child}: {e}")

    def clear(self) -> None:
        """Delete every entry of this cache."""
        self.remove_folder_content(self._subfolder)

    def get_file_path(self, filename: str) -> Path:
        return self._subfolder / filename

    def stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            A dictionary containing:
                - size: Number of entries in the cache folder
                - volume: Total size of the entries in bytes
                - directory: Path to the cache folder
        """
        size = 0
        volume = 0
        try:
            for child in self._subfolder.iterdir():
                if child.name.endswith(TEMP_SUFFIX) and child.name.startswith("."):
                    continue
                if child.is_file():
                    size += 1
                    volume += child.stat().st_size
        except OSError:
            pass
        return {
            "size": size,
            "volume": volume,
            "directory": str(self._subfolder),
        }

    # ------------------------------------------------------------------
    # Worker lifecycle
    # ------------------------------------------------------------------

    def _submit(self, operation: Callable[["FileCache"], None], completion: Completion) -> "Future[None]":
        """Queue ``operation`` on the worker without keeping ``self`` alive."""
        ref = weakref.ref(self)
        sink = self._logger

        def job() -> None:
            cache = ref()
            if cache is None:
                return
            try:
                operation(cache)
            except Exception:
                sink.exception("FileCache queued operation failed")
            finally:
                del cache
            _run_completion(completion, sink)

        try:
            return self._executor.submit(job)
        except RuntimeError:
            self._logger.warning(
                f"FileCache {self.folder_name} is closed; write not scheduled"
            )
            return _done_future()

    def _run_completion(self, completion: Completion) -> None:
        _run_completion(completion, self._logger)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every write queued so far has finished.

        Returns:
            True if the queue drained within ``timeout``
        """
        try:
            marker = self._executor.submit(lambda: None)
        except RuntimeError:
            return True
        try:
            marker.result(timeout=timeout)
        except TimeoutError:
            return False
        return True

    def close(self, wait: bool = True) -> None:
        """
        Stop the worker thread.

        Args:
            wait: Block until queued writes have finished (default True)

        Note:
            After close(), asynchronous writes are logged and dropped.
        """
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "FileCache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self):
        """Destructor to stop the worker on garbage collection."""
        executor = getattr(self, "_executor", None)
        if executor is not None:
            executor.shutdown(wait=False)

    def _create_directory(self) -> None:
        """Create the cache folder if needed."""
        if self._subfolder.exists():
            return
        try:
            self._subfolder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = CacheDirectoryException(str(e), details={"path": str(self._subfolder)})
            self._logger.error(f"FileCache could not create folder: {error.message}")
