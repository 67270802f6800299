from pathlib import Path
import io
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from splice.errors import MalformedHeader  # noqa: E402
from splice.header import HEADER_SIZE, MAGIC, read_header  # noqa: E402
from splice.stream import ByteReader  # noqa: E402
from splice_builders import KICK, build_pattern  # noqa: E402


def test_header_fields() -> None:
    data = build_pattern("0.808-alpha", 120.0, [(0, "kick", KICK)])
    header, budget = read_header(io.BytesIO(data))
    assert header.magic == MAGIC
    assert header.declared_size == 36 + 25
    assert header.version == "0.808-alpha"
    assert header.tempo == 120.0
    assert budget == 25
    assert header.byte_budget == budget


def test_header_consumes_exactly_fifty_bytes() -> None:
    data = build_pattern(tracks=[(0, "kick", KICK)])
    reader = ByteReader(io.BytesIO(data))
    read_header(reader)
    assert reader.offset == HEADER_SIZE == 0x32


def test_version_trailing_nuls_are_trimmed() -> None:
    header, _ = read_header(io.BytesIO(build_pattern("0.909")))
    assert header.version == "0.909"


def test_version_filling_whole_field() -> None:
    version = "v" * 32
    header, _ = read_header(io.BytesIO(build_pattern(version)))
    assert header.version == version


def test_tempo_is_float32() -> None:
    header, _ = read_header(io.BytesIO(build_pattern(tempo=98.4)))
    assert header.tempo != 98.4
    assert header.tempo == pytest.approx(98.4, rel=1e-6)


def test_no_tempo_range_check() -> None:
    header, _ = read_header(io.BytesIO(build_pattern(tempo=-3.5)))
    assert header.tempo == -3.5


def test_minimum_declared_size_gives_zero_budget() -> None:
    _, budget = read_header(io.BytesIO(build_pattern(declared_size=36)))
    assert budget == 0


@pytest.mark.parametrize("declared_size", [0, 1, 35])
def test_declared_size_too_small(declared_size: int) -> None:
    data = build_pattern(declared_size=declared_size)
    with pytest.raises(MalformedHeader, match="declared size") as info:
        read_header(io.BytesIO(data))
    assert info.value.field == "declared_size"
    assert info.value.offset == 13


@pytest.mark.parametrize(
    "cut, field",
    [
        (0, "magic"),
        (5, "magic"),
        (6, "reserved"),
        (12, "reserved"),
        (13, "declared_size"),
        (14, "version"),
        (45, "version"),
        (46, "tempo"),
        (49, "tempo"),
    ],
)
def test_truncated_header(cut: int, field: str) -> None:
    data = build_pattern(tracks=[(0, "kick", KICK)])[:cut]
    with pytest.raises(MalformedHeader, match="truncated") as info:
        read_header(io.BytesIO(data))
    assert info.value.field == field


def test_magic_is_lenient_by_default() -> None:
    header, _ = read_header(io.BytesIO(build_pattern(magic=b"SPLOSH")))
    assert header.magic == b"SPLOSH"


def test_strict_magic_rejects_other_tags() -> None:
    with pytest.raises(MalformedHeader, match="bad magic") as info:
        read_header(io.BytesIO(build_pattern(magic=b"SPLOSH")), strict=True)
    assert info.value.offset == 0


def test_strict_magic_accepts_splice() -> None:
    header, _ = read_header(io.BytesIO(build_pattern()), strict=True)
    assert header.magic == b"SPLICE"


def test_malformed_header_is_value_error() -> None:
    with pytest.raises(ValueError):
        read_header(io.BytesIO(b""))
