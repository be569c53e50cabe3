"""Result type for cache reads that need to tell "missing" from "broken"."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from cachekit.exceptions import CacheException

T = TypeVar("T")


class ReadStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """
    Outcome of a cache read.

    Attributes:
        status: OK, NOT_FOUND or FAILED
        value: The decoded value when status is OK, None otherwise
        error: The soft failure when status is FAILED
    """

    status: ReadStatus
    value: Optional[T] = None
    error: Optional[CacheException] = None

    @classmethod
    def ok(cls, value: T) -> "ReadResult[T]":
        return cls(status=ReadStatus.OK, value=value)

    @classmethod
    def not_found(cls) -> "ReadResult[T]":
        return cls(status=ReadStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: CacheException) -> "ReadResult[T]":
        return cls(status=ReadStatus.FAILED, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status is ReadStatus.OK

    def unwrap_or(self, default: T) -> T:
        """Return the value when OK, ``default`` otherwise."""
        return self.value if self.status is ReadStatus.OK else default
