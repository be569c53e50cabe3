"""
Serialization helpers for the file cache.

JSON payloads go through pydantic's TypeAdapter, so anything pydantic can
validate (BaseModel subclasses, dataclasses, TypedDicts, builtin containers)
can be cached and read back as the same type. Object-graph archives use
pickle.
"""

import pickle
from typing import Any, Type, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from cachekit.exceptions import SerializationException

T = TypeVar("T")


def to_json(value: Any) -> bytes:
    """
    Encode ``value`` as JSON bytes.

    Raises:
        SerializationException: If pydantic cannot serialize the value
    """
    try:
        return TypeAdapter(type(value)).dump_json(value)
    except Exception as e:
        raise SerializationException(
            f"Cannot encode {type(value).__name__} as JSON: {e}",
            details={"type": type(value).__name__},
        ) from e


def from_json(data: bytes, type_: Type[T]) -> T:
    """
    Decode JSON bytes into ``type_``.

    Raises:
        SerializationException: If the payload is not valid JSON for ``type_``,
            or pydantic cannot build a validator for ``type_``
    """
    name = getattr(type_, "__name__", str(type_))
    try:
        adapter = TypeAdapter(type_)
    except PydanticUserError as e:
        raise SerializationException(
            f"Cannot decode JSON as {name}: {e}",
            details={"type": name},
        ) from e
    try:
        return adapter.validate_json(data)
    except ValidationError as e:
        raise SerializationException(
            f"Cannot decode JSON as {name}: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def to_archive(value: Any) -> bytes:
    """Pickle an object graph."""
    try:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        raise SerializationException(
            f"Cannot archive {type(value).__name__}: {e}",
            details={"type": type(value).__name__},
        ) from e


def from_archive(data: bytes) -> Any:
    """Unpickle an object graph. Only read archives this process wrote."""
    try:
        return pickle.loads(data)
    except Exception as e:
        raise SerializationException(f"Cannot unarchive data: {e}") from e
