"""Frame processing engine."""

from .aggregator import FrameAggregator, PixelBuffer

__all__ = ["FrameAggregator", "PixelBuffer"]
