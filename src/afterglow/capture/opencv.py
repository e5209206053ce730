"""OpenCV-backed frame source."""

import logging
from typing import Optional

import numpy as np

from afterglow.exceptions import CaptureDeviceError

from .protocols import Frame

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30.0


class OpenCVFrameSource:
    """
    Capture frames from a video device with cv2.VideoCapture.

    OpenCV delivers BGR; frames are converted to RGB before they are
    returned. The requested resolution and frame rate are hints; the
    device may pick the closest mode it supports.
    """

    def __init__(
        self,
        camera_index: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
        fps: Optional[float] = None,
    ):
        """
        Open a capture device.

        Args:
            camera_index: OpenCV device index
            width: Requested frame width (None = device default)
            height: Requested frame height (None = device default)
            fps: Requested frame rate (None = device default)

        Raises:
            CaptureDeviceError: If the device cannot be opened
        """
        import cv2

        self._cv2 = cv2
        self.camera_index = camera_index
        self._cap = cv2.VideoCapture(camera_index)

        if not self._cap.isOpened():
            self._cap.release()
            raise CaptureDeviceError(camera_index, "unable to open capture device")

        if width is not None and height is not None:
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        if fps is not None:
            self._cap.set(cv2.CAP_PROP_FPS, fps)

        reported_fps = self._cap.get(cv2.CAP_PROP_FPS)
        self._fps = float(reported_fps) if reported_fps and reported_fps > 0 else DEFAULT_FPS

        logger.info(
            f"Opened camera {camera_index} at "
            f"{int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))}x"
            f"{int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))} @ {self._fps:g} fps"
        )

    @property
    def fps(self) -> float:
        return self._fps

    def read(self) -> Frame:
        """
        Read the next frame.

        Raises:
            CaptureDeviceError: If the device returns no frame
        """
        if self._cap is None:
            raise CaptureDeviceError(self.camera_index, "capture device is closed")

        ok, bgr = self._cap.read()
        if not ok or bgr is None:
            raise CaptureDeviceError(self.camera_index, "failed to read frame")

        rgb = self._cv2.cvtColor(bgr, self._cv2.COLOR_BGR2RGB)
        return Frame.from_array(np.ascontiguousarray(rgb, dtype=np.uint8))

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info(f"Released camera {self.camera_index}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
