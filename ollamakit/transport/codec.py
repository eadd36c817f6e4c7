"""
JSON encode/decode helpers mapping failures onto the client error taxonomy.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter

from ..domain.errors import DecodingError, InvalidParameters

T = TypeVar("T")


@lru_cache(maxsize=None)
def type_adapter(tp: Any) -> TypeAdapter:
    """Cached pydantic adapter for any model, container or builtin type."""
    return TypeAdapter(tp)


def encode(value: Any) -> bytes:
    """Serialize a value to JSON bytes using wire names and omitting None fields."""
    try:
        return type_adapter(type(value)).dump_json(value, by_alias=True, exclude_none=True)
    except (TypeError, ValueError) as e:
        raise InvalidParameters(f"Failed to encode request: {e}") from e


def decode(data: bytes, tp: Type[T]) -> T:
    """Parse JSON bytes into `tp`; any failure becomes DecodingError."""
    try:
        return type_adapter(tp).validate_json(data)
    except ValueError as e:  # pydantic.ValidationError is a ValueError
        raise DecodingError(e) from e
