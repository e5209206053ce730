"""Per-segment color aggregation using the quadratic mean."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
import numpy.typing as npt

from afterglow.exceptions import FrameSizeMismatchError
from afterglow.geometry import UNMAPPED, SegmentMap
from afterglow.models import EmptySegmentPolicy, LedColor

logger = logging.getLogger(__name__)

PixelBuffer = Union[bytes, bytearray, memoryview, npt.NDArray[np.uint8]]


@dataclass(slots=True, frozen=True)
class _Partition:
    """Precomputed gather plan for a contiguous range of pixels.

    `pixel_indices` lists the mapped pixels of the range sorted by segment,
    so that `np.add.reduceat` over `starts` sums each present segment.
    """

    start: int
    stop: int
    pixel_indices: npt.NDArray[np.intp]
    segments: npt.NDArray[np.intp]
    starts: npt.NDArray[np.intp]

    @classmethod
    def plan(cls, table: npt.NDArray[np.int32], start: int, stop: int) -> "_Partition":
        local = table[start:stop]
        mapped = np.flatnonzero(local != UNMAPPED)
        segments = local[mapped]
        order = np.argsort(segments, kind="stable")
        sorted_segments = segments[order]
        present, starts = np.unique(sorted_segments, return_index=True)
        return cls(
            start=start,
            stop=stop,
            pixel_indices=(mapped[order] + start).astype(np.intp),
            segments=present.astype(np.intp),
            starts=starts.astype(np.intp),
        )

    def sum_of_squares(
        self, pixels: npt.NDArray[np.uint8], num_segments: int
    ) -> npt.NDArray[np.uint64]:
        sums = np.zeros((num_segments, 3), dtype=np.uint64)
        if self.pixel_indices.size == 0:
            return sums
        values = pixels[self.pixel_indices].astype(np.uint64)
        values *= values
        sums[self.segments] = np.add.reduceat(values, self.starts, axis=0)
        return sums


class FrameAggregator:
    """
    Reduce a frame to one color per segment.

    Each channel of a segment is the root-mean-square of that channel over
    the segment's pixels: ``round(sqrt(sum(c**2) / count))``. Squares are
    summed in uint64, which holds 65025 * width * height for any real frame.

    With ``workers > 1`` the pixel range is split into contiguous partitions
    that are summed on a thread pool, each into its own accumulator, and
    then added together on the calling thread. The result is identical to
    the single-threaded pass.

    Segments without pixels follow the configured EmptySegmentPolicy.
    """

    def __init__(
        self,
        segment_map: SegmentMap,
        policy: EmptySegmentPolicy = EmptySegmentPolicy.BLACK,
        workers: int = 1,
    ):
        """
        Initialize aggregator for a segment map.

        Args:
            segment_map: Pixel-to-segment table for the frame size
            policy: Behavior for segments that no pixel maps onto
            workers: Number of threads for the accumulation pass (>= 1)
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")

        self._map = segment_map
        self._policy = EmptySegmentPolicy(policy)
        self._workers = workers
        self._counts = segment_map.counts()
        self._empty = self._counts == 0

        num_pixels = len(segment_map)
        bounds = np.linspace(0, num_pixels, workers + 1).astype(np.intp)
        self._partitions = [
            _Partition.plan(segment_map.table, int(lo), int(hi))
            for lo, hi in zip(bounds[:-1], bounds[1:])
        ]
        self._executor: Optional[ThreadPoolExecutor] = (
            ThreadPoolExecutor(max_workers=workers, thread_name_prefix="afterglow-agg")
            if workers > 1
            else None
        )

        if self._empty.any():
            logger.warning(
                f"{int(self._empty.sum())} of {segment_map.num_segments} segments have no "
                f"pixels at {segment_map.width}x{segment_map.height}; "
                f"using '{self._policy.value}' for them"
            )

    @property
    def segment_map(self) -> SegmentMap:
        return self._map

    @property
    def policy(self) -> EmptySegmentPolicy:
        return self._policy

    @property
    def workers(self) -> int:
        return self._workers

    def _as_pixels(self, buffer: PixelBuffer) -> npt.NDArray[np.uint8]:
        """View the buffer as (width*height, 3) uint8 without copying if possible."""
        if isinstance(buffer, np.ndarray):
            if buffer.dtype != np.uint8:
                raise TypeError(f"Pixel buffer must be uint8, got {buffer.dtype}")
            flat = buffer.reshape(-1)
        else:
            flat = np.frombuffer(buffer, dtype=np.uint8)

        expected = 3 * self._map.width * self._map.height
        if flat.size != expected:
            raise FrameSizeMismatchError(expected, int(flat.size), self._map.width, self._map.height)
        return flat.reshape(-1, 3)

    def sum_of_squares(self, buffer: PixelBuffer) -> npt.NDArray[np.uint64]:
        """
        Per-segment, per-channel sum of squared channel values.

        Returns:
            uint64 array of shape (num_segments, 3)
        """
        pixels = self._as_pixels(buffer)
        num_segments = self._map.num_segments

        total = np.zeros((num_segments, 3), dtype=np.uint64)
        if self._executor is None:
            for partition in self._partitions:
                total += partition.sum_of_squares(pixels, num_segments)
            return total

        futures = [
            self._executor.submit(partition.sum_of_squares, pixels, num_segments)
            for partition in self._partitions
        ]
        for future in futures:
            total += future.result()
        return total

    def aggregate_array(self, buffer: PixelBuffer) -> tuple[npt.NDArray[np.uint8], npt.NDArray[np.bool_]]:
        """
        Compute the RMS color of every segment.

        Returns:
            Tuple of (colors, empty): uint8 array of shape (num_segments, 3)
            with zeros for empty segments, and a mask of the empty segments.
        """
        sums = self.sum_of_squares(buffer)
        colors = np.zeros((self._map.num_segments, 3), dtype=np.uint8)

        filled = ~self._empty
        if filled.any():
            means = sums[filled].astype(np.float64) / self._counts[filled][:, np.newaxis]
            rms = np.floor(np.sqrt(means) + 0.5)
            colors[filled] = np.clip(rms, 0, 255).astype(np.uint8)

        return colors, self._empty.copy()

    def aggregate(
        self,
        buffer: PixelBuffer,
        previous: Optional[Sequence[LedColor]] = None,
    ) -> list[LedColor]:
        """
        Compute one color per segment for a frame.

        Args:
            buffer: Row-major RGB pixel buffer of exactly 3*width*height bytes
            previous: Current strip colors, used by EmptySegmentPolicy.HOLD

        Returns:
            List of num_segments colors in segment order

        Raises:
            FrameSizeMismatchError: If the buffer length is wrong
        """
        num_segments = self._map.num_segments
        if previous is not None and len(previous) != num_segments:
            raise ValueError(
                f"Expected {num_segments} previous colors, got {len(previous)}"
            )

        colors, empty = self.aggregate_array(buffer)
        result = []
        for index, (r, g, b) in enumerate(colors.tolist()):
            if empty[index]:
                result.append(self._fill_empty(index, previous))
            else:
                result.append(LedColor(r=r, g=g, b=b))
        return result

    def _fill_empty(self, index: int, previous: Optional[Sequence[LedColor]]) -> LedColor:
        if self._policy is EmptySegmentPolicy.HOLD and previous is not None:
            return previous[index]
        return LedColor.off()

    def close(self) -> None:
        """Shut down the worker pool, if any."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
