"""Decoder for SPLICE drum-machine pattern files."""

from .errors import (  # noqa: F401
    DecodeError,
    InvalidStepValue,
    MalformedHeader,
    TruncatedTrack,
    TruncatedTrackData,
    TruncatedTrackName,
)
from .header import (  # noqa: F401
    HEADER_SIZE,
    MAGIC,
    MIN_DECLARED_SIZE,
    Header,
    read_header,
)
from .pattern import (  # noqa: F401
    Pattern,
    decode,
    decode_bytes,
    decode_file,
    format_tempo,
    render,
)
from .stream import (  # noqa: F401
    BoundedReader,
    ByteReader,
    ReadResult,
    ReadStatus,
)
from .tracks import (  # noqa: F401
    STEP_COUNT,
    Track,
    read_track,
    read_tracks,
)
