"""Afterglow: camera-driven ambient lighting for APA102 LED strips."""

__version__ = "0.1.0"

from .core import AmbilightController
from .engine import FrameAggregator
from .geometry import SegmentMap, build_segment_map
from .led import LedStrip, encode
from .models import AppConfig, EmptySegmentPolicy, LedColor

__all__ = [
    "AmbilightController",
    "AppConfig",
    "EmptySegmentPolicy",
    "FrameAggregator",
    "LedColor",
    "LedStrip",
    "SegmentMap",
    "build_segment_map",
    "encode",
]
