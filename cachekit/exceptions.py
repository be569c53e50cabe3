"""
Custom exception hierarchy for cachekit.

The file cache never raises these out of its public operations; they describe
soft failures carried in ``ReadResult.error`` and log records, and are raised
by the CLI layer where a hard failure is wanted.
"""

from typing import Optional


class CacheKitException(Exception):
    """Base exception for all cachekit errors"""
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CacheException(CacheKitException):
    """Cache-related errors"""
    error_code = "CACHE_ERROR"


class CacheDirectoryException(CacheException):
    """Cache folder could not be created or listed"""
    error_code = "CACHE_DIRECTORY_ERROR"


class CacheReadException(CacheException):
    """Cache entry could not be read"""
    error_code = "CACHE_READ_ERROR"


class CacheWriteException(CacheException):
    """Cache entry could not be written or removed"""
    error_code = "CACHE_WRITE_ERROR"


class SerializationException(CacheException):
    """Value could not be encoded or decoded"""
    error_code = "SERIALIZATION_ERROR"
