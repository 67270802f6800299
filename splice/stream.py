"""Byte readers used by the header and track decoders.

``ByteReader`` wraps any object with a ``read(n)`` method and keeps the
absolute offset so errors can point at the failing field.
``BoundedReader`` is a sub-view that stops after a fixed number of
bytes and then reports end-of-input, whatever the source still holds.

``read_exact`` never raises on a short read.  It returns a
``ReadResult`` whose status tells the caller which of three things
happened:

  OK     all requested bytes were read
  EOF    nothing at all was available
  SHORT  some, but not all, bytes were available
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import BinaryIO, List


class ReadStatus(Enum):
    OK = auto()
    EOF = auto()
    SHORT = auto()


@dataclass(frozen=True)
class ReadResult:
    status: ReadStatus
    data: bytes
    requested: int

    @classmethod
    def from_bytes(cls, data: bytes, requested: int) -> "ReadResult":
        if len(data) == requested:
            status = ReadStatus.OK
        elif not data:
            status = ReadStatus.EOF
        else:
            status = ReadStatus.SHORT
        return cls(status=status, data=data, requested=requested)

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK

    @property
    def eof(self) -> bool:
        return self.status is ReadStatus.EOF

    @property
    def got(self) -> int:
        return len(self.data)


class Reader:
    offset: int

    def read(self, size: int) -> bytes:
        raise NotImplementedError

    def read_exact(self, size: int) -> ReadResult:
        """Read ``size`` bytes, looping over short reads from the source."""

        chunks: List[bytes] = []
        remaining = size
        while remaining > 0:
            chunk = self.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return ReadResult.from_bytes(b"".join(chunks), size)


class ByteReader(Reader):
    """Offset-tracking wrapper around a readable byte source.

    The source is borrowed: the reader never closes it.
    """

    def __init__(self, source: BinaryIO, offset: int = 0) -> None:
        self._source = source
        self.offset = offset

    def read(self, size: int) -> bytes:
        if size <= 0:
            return b""
        chunk = self._source.read(size) or b""
        self.offset += len(chunk)
        return chunk


class BoundedReader(Reader):
    """Deliver at most ``limit`` bytes from ``inner``, then behave as EOF."""

    def __init__(self, inner: Reader, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._inner = inner
        self.remaining = limit

    @property
    def offset(self) -> int:  # type: ignore[override]
        return self._inner.offset

    def read(self, size: int) -> bytes:
        if size <= 0 or self.remaining <= 0:
            return b""
        chunk = self._inner.read(min(size, self.remaining))
        self.remaining -= len(chunk)
        return chunk


def as_reader(source: BinaryIO | Reader) -> Reader:
    """Wrap ``source`` in a ``ByteReader`` unless it already is a reader."""

    if isinstance(source, Reader):
        return source
    return ByteReader(source)
