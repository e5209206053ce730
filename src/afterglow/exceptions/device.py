"""Device-related exceptions.

Raised by the frame source and bus transport collaborators:
- DeviceError: Base class for device errors
- CaptureDeviceError: Camera cannot be opened or read
- TransportError: Bus write failed
"""

from typing import Optional

from .base import AfterglowError


class DeviceError(AfterglowError):
    """Base class for capture and transport device errors."""
    pass


class CaptureDeviceError(DeviceError):
    """Video capture device cannot be opened or read."""

    def __init__(self, camera_index: int, reason: str):
        """
        Initialize capture device error.

        Args:
            camera_index: Index of the capture device
            reason: What went wrong
        """
        super().__init__(
            user_message=f"Camera {camera_index}: {reason}",
            technical_message=f"Capture device {camera_index} failed: {reason}",
            recovery_hint=(
                "Check that the capture device is connected and not in use by "
                "another application. Use --camera to select a different device."
            ),
        )
        self.camera_index = camera_index
        self.reason = reason


class TransportError(DeviceError):
    """Writing to the LED bus failed."""

    def __init__(
        self,
        device: str,
        original_error: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        """
        Initialize transport error.

        Args:
            device: Bus device description (e.g. "/dev/spidev0.0")
            original_error: Underlying error message
            recovery_hint: Specific fix, replaces the generic SPI hint
        """
        technical = f"Bus write to {device} failed"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Failed to write to LED bus {device}",
            technical_message=technical,
            recovery_hint=recovery_hint or (
                "Make sure SPI is enabled and the current user can access "
                f"{device}. Use --dry-run to run without hardware."
            ),
        )
        self.device = device
        self.original_error = original_error
