"""LED strip state and APA102 encoding."""

from .apa102 import (
    DataFrame,
    FrameKind,
    encode,
    encode_frames,
    end_frame_count,
    make_data_frames,
)
from .strip import LedStrip

__all__ = [
    "DataFrame",
    "FrameKind",
    "LedStrip",
    "encode",
    "encode_frames",
    "end_frame_count",
    "make_data_frames",
]
