"""Frame sources."""

from .opencv import OpenCVFrameSource
from .protocols import Frame, FrameSource
from .static import StaticFrameSource

__all__ = ["Frame", "FrameSource", "OpenCVFrameSource", "StaticFrameSource"]
