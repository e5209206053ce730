"""
Pixel-to-segment lookup table for a strip wrapped around the frame.

The LEDs run around the border of the picture, so each LED samples the
wedge of the frame that points at it from the center::

    dx     = half_w - x                  (positive to the left)
    dy     = y - half_h                  (positive downwards)
    angle  = atan2(dy, dx) + pi          in (0, 2pi]
    segment = floor(angle * N / 2pi)     clamped to N - 1

Segment 0 starts at the middle of the right edge and the indices increase
counter-clockwise: up the right edge, across the top, down the left edge
and back along the bottom. This is the order the strip is wired in.

Pixels closer to the center than min(half_w, half_h) / 2 form a dead zone
and are unmapped, so the middle of the picture does not drown out the
border colors.

The table depends only on `(N, width, height)`. It is built once with
numpy and cached; per-frame work is a single lookup per pixel.
"""

import logging
import math
from functools import lru_cache
from typing import Iterator, Optional

import numpy as np
import numpy.typing as npt

from afterglow.exceptions import InvalidFrameSizeError, InvalidLedCountError

logger = logging.getLogger(__name__)

UNMAPPED = -1


def angles_to_segments(angles: npt.ArrayLike, num_segments: int) -> npt.NDArray[np.int64]:
    """
    Convert angles in [0, 2pi] to segment indices.

    Angles that land exactly on 2pi (or round up to it) are clamped to the
    last segment.
    """
    if num_segments < 1:
        raise InvalidLedCountError(num_segments)
    scaled = np.asarray(angles, dtype=np.float64) * (num_segments / math.tau)
    segments = np.floor(scaled).astype(np.int64)
    return np.clip(segments, 0, num_segments - 1)


def angle_to_segment(angle: float, num_segments: int) -> int:
    """Scalar form of angles_to_segments."""
    return int(angles_to_segments(angle, num_segments))


class SegmentMap:
    """
    Immutable lookup table from pixel position to segment index.

    Entries are stored row-major in a read-only int32 array, with
    UNMAPPED (-1) for pixels inside the dead zone. Indexing returns
    `None` or an `int`.
    """

    __slots__ = ("_num_segments", "_width", "_height", "_table")

    def __init__(self, num_segments: int, width: int, height: int, table: npt.NDArray[np.int32]):
        if table.shape != (width * height,):
            raise ValueError(
                f"Segment table has shape {table.shape}, expected ({width * height},)"
            )
        table.flags.writeable = False
        self._num_segments = num_segments
        self._width = width
        self._height = height
        self._table = table

    @property
    def num_segments(self) -> int:
        return self._num_segments

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def table(self) -> npt.NDArray[np.int32]:
        """Read-only row-major table, UNMAPPED for dead-zone pixels."""
        return self._table

    def __len__(self) -> int:
        return self._table.shape[0]

    def __getitem__(self, index: int) -> Optional[int]:
        segment = int(self._table[index])
        return None if segment == UNMAPPED else segment

    def __iter__(self) -> Iterator[Optional[int]]:
        for segment in self._table.tolist():
            yield None if segment == UNMAPPED else segment

    def segment_at(self, x: int, y: int) -> Optional[int]:
        """Segment of pixel (x, y), or None if it is unmapped."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} frame")
        return self[y * self._width + x]

    def to_list(self) -> list[Optional[int]]:
        return list(self)

    def counts(self) -> npt.NDArray[np.int64]:
        """Number of pixels mapped onto each segment."""
        mapped = self._table[self._table != UNMAPPED]
        return np.bincount(mapped, minlength=self._num_segments).astype(np.int64)

    def empty_segments(self) -> list[int]:
        """Segments that no pixel maps onto."""
        return np.flatnonzero(self.counts() == 0).tolist()

    def __repr__(self) -> str:
        return (
            f"SegmentMap(num_segments={self._num_segments}, "
            f"width={self._width}, height={self._height})"
        )


def _compute_table(num_segments: int, width: int, height: int) -> npt.NDArray[np.int32]:
    half_width = width // 2
    half_height = height // 2
    edge = min(half_width, half_height) / 2

    ys, xs = np.mgrid[0:height, 0:width]
    dx = (half_width - xs).astype(np.float64)
    dy = (ys - half_height).astype(np.float64)

    radius = np.hypot(dx, dy)
    theta = np.arctan2(dy, dx) + math.pi
    segments = angles_to_segments(theta, num_segments)

    table = np.where(radius >= edge, segments, UNMAPPED).astype(np.int32)
    return table.ravel()


@lru_cache(maxsize=8)
def build_segment_map(num_segments: int, width: int, height: int) -> SegmentMap:
    """
    Build (or fetch from cache) the segment map for a strip and frame size.

    Args:
        num_segments: Number of LEDs on the strip (N >= 1)
        width: Frame width in pixels (> 0)
        height: Frame height in pixels (> 0)

    Raises:
        InvalidLedCountError: If num_segments < 1
        InvalidFrameSizeError: If width or height is not positive
    """
    if num_segments < 1:
        raise InvalidLedCountError(num_segments)
    if width <= 0 or height <= 0:
        raise InvalidFrameSizeError(width, height)

    table = _compute_table(num_segments, width, height)
    segment_map = SegmentMap(num_segments, width, height, table)

    logger.debug(
        f"Built segment map for {num_segments} LEDs at {width}x{height} "
        f"({int(np.count_nonzero(table != UNMAPPED))} mapped pixels)"
    )
    return segment_map
