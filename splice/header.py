"""Fixed-size SPLICE header.

Layout (little-endian):

  0x00  6   magic tag, "SPLICE"
  0x06  7   reserved
  0x0D  1   declared size: bytes after this field that belong to the pattern
  0x0E  32  version, NUL padded
  0x2E  4   tempo, IEEE-754 float32

The track section follows at 0x32 and is ``declared_size - 36`` bytes long.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Tuple

from .errors import MalformedHeader
from .stream import Reader, as_reader

MAGIC = b"SPLICE"
MAGIC_SIZE = 6
RESERVED_SIZE = 7
VERSION_SIZE = 32
TEMPO_SIZE = 4
HEADER_SIZE = MAGIC_SIZE + RESERVED_SIZE + 1 + VERSION_SIZE + TEMPO_SIZE  # 0x32
MIN_DECLARED_SIZE = VERSION_SIZE + TEMPO_SIZE


def trim_version(raw: bytes) -> str:
    return raw.rstrip(b"\x00").decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Header:
    magic: bytes
    declared_size: int
    version: str
    tempo: float

    @property
    def byte_budget(self) -> int:
        """Bytes the track section may occupy."""
        return self.declared_size - MIN_DECLARED_SIZE


def _read_field(reader: Reader, field: str, size: int) -> bytes:
    start = reader.offset
    result = reader.read_exact(size)
    if not result.ok:
        raise MalformedHeader(
            f"header truncated in {field} at offset 0x{start:X} "
            f"(got {result.got} of {size} bytes)",
            offset=start,
            field=field,
        )
    return result.data


def read_header(source: BinaryIO | Reader, *, strict: bool = False) -> Tuple[Header, int]:
    """Decode the header and return it with the track-section byte budget.

    With ``strict`` the magic tag must be ``b"SPLICE"``; otherwise any six
    bytes are accepted.
    """
    reader = as_reader(source)

    magic_offset = reader.offset
    magic = _read_field(reader, "magic", MAGIC_SIZE)
    if strict and magic != MAGIC:
        raise MalformedHeader(
            f"bad magic {magic!r} at offset 0x{magic_offset:X}, expected {MAGIC!r}",
            offset=magic_offset,
            field="magic",
        )
    _read_field(reader, "reserved", RESERVED_SIZE)

    size_offset = reader.offset
    declared_size = _read_field(reader, "declared_size", 1)[0]
    if declared_size < MIN_DECLARED_SIZE:
        raise MalformedHeader(
            f"declared size {declared_size} at offset 0x{size_offset:X} is smaller "
            f"than version + tempo ({MIN_DECLARED_SIZE} bytes)",
            offset=size_offset,
            field="declared_size",
        )

    version = trim_version(_read_field(reader, "version", VERSION_SIZE))
    tempo = struct.unpack("<f", _read_field(reader, "tempo", TEMPO_SIZE))[0]

    header = Header(
        magic=magic,
        declared_size=declared_size,
        version=version,
        tempo=tempo,
    )
    return header, header.byte_budget
