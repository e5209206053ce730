"""Frame source protocol and frame container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
import numpy.typing as npt


@dataclass(slots=True, frozen=True)
class Frame:
    """
    One captured video frame.

    `pixels` is row-major RGB, shape (height, width, 3), dtype uint8.
    """

    width: int
    height: int
    pixels: npt.NDArray[np.uint8]

    @classmethod
    def from_array(cls, pixels: npt.NDArray[np.uint8]) -> Frame:
        """Wrap an (height, width, 3) uint8 array."""
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) array, got shape {pixels.shape}")
        height, width = pixels.shape[:2]
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def solid(cls, width: int, height: int, rgb: tuple[int, int, int]) -> Frame:
        """Create a frame filled with a single color."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = rgb
        return cls(width=width, height=height, pixels=pixels)


class FrameSource(Protocol):
    """Protocol for anything that produces frames."""

    @property
    def fps(self) -> float:
        """Nominal frame rate in frames per second."""
        ...

    def read(self) -> Frame:
        """
        Block until the next frame is available and return it.

        Raises:
            CaptureDeviceError: If the frame cannot be read
        """
        ...

    def close(self) -> None:
        """Release the device."""
        ...
