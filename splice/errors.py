"""Exceptions raised while decoding SPLICE pattern files.

Every decode failure is fatal: the caller gets one of these and no
partial pattern.  They subclass ``ValueError`` so callers that only care
about "bad input" can catch that.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for malformed SPLICE input."""

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        field: str | None = None,
        track_index: int | None = None,
    ) -> None:
        self.offset = offset
        self.field = field
        self.track_index = track_index
        super().__init__(message)


class MalformedHeader(DecodeError):
    """Header is truncated, or declares a size too small to hold it."""


class _Truncated(DecodeError):
    def __init__(
        self,
        *,
        field: str,
        offset: int,
        expected: int,
        got: int,
        track_index: int,
    ) -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            f"track {track_index}: {field} truncated at offset 0x{offset:X} "
            f"(got {got} of {expected} bytes)",
            offset=offset,
            field=field,
            track_index=track_index,
        )


class TruncatedTrack(_Truncated):
    """Stream ended inside a track id or name-length field."""


class TruncatedTrackName(_Truncated):
    """Fewer than ``name_length`` bytes were left for the track name."""


class TruncatedTrackData(_Truncated):
    """Fewer than 16 bytes were left for the step grid."""


class InvalidStepValue(DecodeError):
    """A step byte was neither 0 nor 1."""

    def __init__(self, *, value: int, step: int, offset: int, track_index: int) -> None:
        self.value = value
        self.step = step
        super().__init__(
            f"track {track_index}: step {step} has non-boolean value 0x{value:02X} "
            f"at offset 0x{offset:X}",
            offset=offset,
            field="steps",
            track_index=track_index,
        )
