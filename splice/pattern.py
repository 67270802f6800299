"""Decoded SPLICE pattern and its text rendering."""

from __future__ import annotations

import io
import math
import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Tuple

from .header import Header, read_header
from .stream import ByteReader
from .tracks import Track, read_tracks

FLOAT32_MAX_DIGITS = 9  # enough to round-trip any float32


@dataclass(frozen=True)
class Pattern:
    """Header metadata plus tracks in file order."""

    header: Header
    tracks: Tuple[Track, ...]

    @property
    def version(self) -> str:
        return self.header.version

    @property
    def tempo(self) -> float:
        return self.header.tempo

    def to_text(self) -> str:
        return render(self)

    def __str__(self) -> str:
        return render(self)


def _float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def format_tempo(value: float) -> str:
    """Shortest decimal text that reads back as the same float32, ``%g`` style.

    Exponent notation is used for exponents below -4 or from 6 upwards;
    trailing zeros are dropped (``120.0`` -> ``120``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    target = _float32(value)
    for digits in range(1, FLOAT32_MAX_DIGITS + 1):
        text = f"{value:.{digits - 1}e}"
        try:
            if _float32(float(text)) == target:
                break
        except OverflowError:
            # rounding pushed the candidate past float32 range
            continue

    mantissa, exp_text = text.split("e")
    exponent = int(exp_text)
    if exponent < -4 or exponent >= 6:
        if "." in mantissa:
            mantissa = mantissa.rstrip("0").rstrip(".")
        return f"{mantissa}e{exponent:+03d}"

    decimals = max(digits - 1 - exponent, 0)
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render(pattern: Pattern) -> str:
    lines = [
        f"Saved with HW Version: {pattern.version}",
        f"Tempo: {format_tempo(pattern.tempo)}",
    ]
    lines.extend(track.to_text() for track in pattern.tracks)
    return "".join(line + "\n" for line in lines)


def decode(source: BinaryIO | bytes | bytearray | memoryview, *, strict: bool = False) -> Pattern:
    """Decode a pattern from a readable byte source.

    ``source`` may be anything with a ``read(n)`` method, or a bytes-like
    value.  The source is not closed.  Bytes past the declared track
    section are left unread.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))
    reader = ByteReader(source)
    header, byte_budget = read_header(reader, strict=strict)
    tracks = read_tracks(reader, byte_budget)
    return Pattern(header=header, tracks=tracks)


def decode_bytes(data: bytes, *, strict: bool = False) -> Pattern:
    return decode(io.BytesIO(data), strict=strict)


def decode_file(path: str | os.PathLike[str], *, strict: bool = False) -> Pattern:
    with open(path, "rb") as fh:
        return decode(fh, strict=strict)
