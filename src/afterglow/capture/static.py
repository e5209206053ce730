"""Frame source that replays fixed frames."""

from typing import Sequence

from .protocols import Frame


class StaticFrameSource:
    """Cycle through a fixed list of frames. Used for dry runs and tests."""

    def __init__(self, frames: Sequence[Frame], fps: float = 30.0):
        if not frames:
            raise ValueError("StaticFrameSource needs at least one frame")
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        self._frames = list(frames)
        self._fps = fps
        self._position = 0
        self.frames_read = 0
        self.closed = False

    @property
    def fps(self) -> float:
        return self._fps

    def read(self) -> Frame:
        frame = self._frames[self._position]
        self._position = (self._position + 1) % len(self._frames)
        self.frames_read += 1
        return frame

    def close(self) -> None:
        self.closed = True
