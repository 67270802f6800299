"""Decode the SPLICE track section.

Each record is::

  id         u32 LE
  name_len   u8
  name       name_len bytes
  steps      16 bytes, each 0x00 or 0x01

Records are packed back to back until the header's byte budget runs out.
End of input is only legal right before an id field; anywhere else it
means the file was cut short.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Tuple

from .errors import (
    InvalidStepValue,
    TruncatedTrack,
    TruncatedTrackData,
    TruncatedTrackName,
)
from .stream import BoundedReader, Reader, as_reader

STEP_COUNT = 16
ID_SIZE = 4


@dataclass(frozen=True)
class Track:
    """One instrument lane: id, display name and 16 on/off steps."""

    id: int
    name: str
    steps: Tuple[bool, ...]

    def __post_init__(self) -> None:
        if len(self.steps) != STEP_COUNT:
            raise ValueError(
                f"track {self.id} needs {STEP_COUNT} steps, got {len(self.steps)}"
            )

    def grid(self) -> str:
        """Steps as ``|x---|----|x---|----|``."""
        cells = ["x" if step else "-" for step in self.steps]
        groups = ["".join(cells[i : i + 4]) for i in range(0, STEP_COUNT, 4)]
        return "|" + "|".join(groups) + "|"

    def to_text(self) -> str:
        return f"({self.id}) {self.name}\t{self.grid()}"

    def __str__(self) -> str:
        return self.to_text()


def parse_steps(raw: bytes, *, offset: int, track_index: int) -> Tuple[bool, ...]:
    steps: List[bool] = []
    for step, value in enumerate(raw):
        if value == 0x00:
            steps.append(False)
        elif value == 0x01:
            steps.append(True)
        else:
            raise InvalidStepValue(
                value=value, step=step, offset=offset + step, track_index=track_index
            )
    return tuple(steps)


def read_track(reader: Reader, track_index: int) -> Optional[Track]:
    """Read one record, or return None at a clean track boundary."""

    start = reader.offset
    result = reader.read_exact(ID_SIZE)
    if result.eof:
        return None
    if not result.ok:
        raise TruncatedTrack(
            field="id", offset=start, expected=ID_SIZE, got=result.got,
            track_index=track_index,
        )
    track_id = int.from_bytes(result.data, "little")

    start = reader.offset
    result = reader.read_exact(1)
    if not result.ok:
        raise TruncatedTrack(
            field="name_length", offset=start, expected=1, got=result.got,
            track_index=track_index,
        )
    name_length = result.data[0]

    start = reader.offset
    result = reader.read_exact(name_length)
    if not result.ok:
        raise TruncatedTrackName(
            field="name", offset=start, expected=name_length, got=result.got,
            track_index=track_index,
        )
    name = result.data.decode("utf-8", errors="replace")

    start = reader.offset
    result = reader.read_exact(STEP_COUNT)
    if not result.ok:
        raise TruncatedTrackData(
            field="steps", offset=start, expected=STEP_COUNT, got=result.got,
            track_index=track_index,
        )
    steps = parse_steps(result.data, offset=start, track_index=track_index)

    return Track(id=track_id, name=name, steps=steps)


def read_tracks(source: BinaryIO | Reader, byte_budget: int) -> Tuple[Track, ...]:
    """Read every track record within ``byte_budget`` bytes of ``source``."""

    bounded = BoundedReader(as_reader(source), byte_budget)
    tracks: List[Track] = []
    while True:
        track = read_track(bounded, len(tracks))
        if track is None:
            return tuple(tracks)
        tracks.append(track)
