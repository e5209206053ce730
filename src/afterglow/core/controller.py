"""Synchronous capture → aggregate → encode → transmit loop."""

import logging
import time
from typing import Optional

from afterglow.capture import FrameSource
from afterglow.engine import FrameAggregator
from afterglow.exceptions import ErrorContext, InvalidLedCountError
from afterglow.geometry import build_segment_map
from afterglow.led import LedStrip
from afterglow.models import EmptySegmentPolicy
from afterglow.transport import BusTransport

logger = logging.getLogger(__name__)


class AmbilightController:
    """
    Drive an LED strip from a frame source.

    Each tick reads one frame, reduces it to one color per LED, writes the
    colors into the strip, and sends the serialized strip to the transport.
    The loop then sleeps for one frame interval.

    Frame acquisition and bus writes may block; there is no timeout. The
    strip is only ever touched from the thread that calls `step()`/`run()`.
    """

    def __init__(
        self,
        source: FrameSource,
        transport: BusTransport,
        num_leds: int,
        policy: EmptySegmentPolicy = EmptySegmentPolicy.BLACK,
        workers: int = 1,
        fps: Optional[float] = None,
    ):
        """
        Initialize controller.

        Args:
            source: Frame source (camera or replay)
            transport: Bus transport the encoded bytes are written to
            num_leds: Number of LEDs on the strip
            policy: Color of segments no pixel maps onto
            workers: Aggregator worker threads
            fps: Output rate; defaults to the source's frame rate

        Raises:
            InvalidLedCountError: If num_leds < 1
        """
        if num_leds < 1:
            raise InvalidLedCountError(num_leds)
        if fps is not None and fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")

        self._source = source
        self._transport = transport
        self._num_leds = num_leds
        self._policy = EmptySegmentPolicy(policy)
        self._workers = workers
        self._fps = fps

        self._strip = LedStrip(num_leds)
        self._aggregator: Optional[FrameAggregator] = None
        self._running = False
        self.frames_processed = 0

    @property
    def strip(self) -> LedStrip:
        return self._strip

    @property
    def fps(self) -> float:
        return self._fps if self._fps is not None else self._source.fps

    @property
    def frame_interval(self) -> float:
        """Seconds to sleep between ticks."""
        return 1.0 / self.fps

    @property
    def is_running(self) -> bool:
        return self._running

    def _aggregator_for(self, width: int, height: int) -> FrameAggregator:
        """Return an aggregator for the frame size, rebuilding it if the size changed."""
        current = self._aggregator
        if current is not None:
            segment_map = current.segment_map
            if segment_map.width == width and segment_map.height == height:
                return current
            logger.info(
                f"Frame size changed from {segment_map.width}x{segment_map.height} "
                f"to {width}x{height}, rebuilding segment map"
            )
            current.close()

        segment_map = build_segment_map(self._num_leds, width, height)
        self._aggregator = FrameAggregator(segment_map, policy=self._policy, workers=self._workers)
        return self._aggregator

    def step(self) -> bytes:
        """
        Process one frame and send it.

        Returns:
            The bytes written to the transport
        """
        frame = self._source.read()
        aggregator = self._aggregator_for(frame.width, frame.height)

        colors = aggregator.aggregate(frame.pixels, previous=self._strip.colors)
        for index, color in enumerate(colors):
            self._strip.set(index, color)

        data = self._strip.serialize()
        self._transport.write(data)
        self.frames_processed += 1
        return data

    def run(self, max_frames: Optional[int] = None) -> None:
        """
        Run the loop until stop() is called or max_frames have been sent.

        Args:
            max_frames: Stop after this many frames (None = run forever)
        """
        interval = self.frame_interval
        self._running = True
        processed = 0
        logger.info(
            f"Starting ambilight loop: {self._num_leds} LEDs, {self.fps:g} fps, "
            f"empty segments: {self._policy.value}"
        )

        try:
            while self._running:
                self.step()
                processed += 1
                if max_frames is not None and processed >= max_frames:
                    break
                time.sleep(interval)
        finally:
            self._running = False
            logger.info(f"Ambilight loop stopped after {processed} frames")

    def stop(self) -> None:
        """Ask the loop to exit after the current tick."""
        self._running = False

    def blank(self) -> None:
        """Turn every LED off and send the result."""
        self._strip.clear()
        self._transport.write(self._strip.serialize())

    def close(self) -> None:
        """Blank the strip and release the source, transport and workers."""
        self.stop()

        with ErrorContext("blank LED strip", logger_instance=logger, re_raise=False):
            self.blank()

        if self._aggregator is not None:
            self._aggregator.close()
            self._aggregator = None

        self._source.close()
        self._transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
