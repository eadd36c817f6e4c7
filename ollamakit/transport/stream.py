"""
Incremental decoder for newline-delimited JSON bodies.

Bytes are accumulated until a newline arrives; the accumulated line is then
validated as one record. Lines that do not validate are discarded without
raising; a bad line never ends the stream.
"""

from __future__ import annotations
import logging
from typing import Callable, Generic, Iterator, Optional, Type, TypeVar

from pydantic import ValidationError

from .codec import type_adapter

T = TypeVar("T")

NEWLINE = 0x0A

DiscardHook = Callable[[bytes, Exception], None]


class NDJSONDecoder(Generic[T]):
    """Turns arbitrary byte chunks into typed records, one per line."""

    def __init__(
        self,
        record_type: Type[T],
        *,
        on_discard: Optional[DiscardHook] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._adapter = type_adapter(record_type)
        self._buffer = bytearray()
        self._on_discard = on_discard
        self._logger = logger or logging.getLogger(__name__)

    @property
    def pending(self) -> bytes:
        """Bytes received since the last newline (never emitted on their own)."""
        return bytes(self._buffer)

    def feed(self, chunk: bytes) -> Iterator[T]:
        """Consume a chunk, yielding every record completed by it."""
        start = 0
        while True:
            idx = chunk.find(NEWLINE, start)
            if idx < 0:
                self._buffer += chunk[start:]
                return
            self._buffer += chunk[start:idx + 1]
            start = idx + 1
            line = bytes(self._buffer)
            self._buffer.clear()
            record = self._decode_line(line)
            if record is not None:
                yield record

    def _decode_line(self, line: bytes) -> Optional[T]:
        try:
            return self._adapter.validate_json(line.strip())
        except ValidationError as e:
            self._logger.debug(f"Dropping undecodable stream line ({len(line)} bytes): {e.error_count()} error(s)")
            if self._on_discard is not None:
                self._on_discard(line, e)
            return None
