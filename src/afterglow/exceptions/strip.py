"""LED strip and frame buffer exceptions.

Both signal caller misuse. They are never retried and are raised before
any state is modified.
"""

from .base import AfterglowError


class LedIndexError(AfterglowError, IndexError):
    """LED index is outside the strip."""

    def __init__(self, index: int, led_count: int):
        """
        Initialize LED index error.

        Args:
            index: The offending index
            led_count: Number of LEDs on the strip
        """
        super().__init__(
            user_message=f"LED index {index} is out of range",
            technical_message=f"LED index {index} out of range (valid: 0-{led_count - 1})",
        )
        self.index = index
        self.led_count = led_count


class FrameSizeMismatchError(AfterglowError, ValueError):
    """Pixel buffer length does not match the frame dimensions."""

    def __init__(self, expected: int, actual: int, width: int, height: int):
        """
        Initialize frame size mismatch error.

        Args:
            expected: Expected buffer length in bytes (3 * width * height)
            actual: Length of the buffer that was passed
            width: Frame width in pixels
            height: Frame height in pixels
        """
        super().__init__(
            user_message=f"Frame buffer has {actual} bytes, expected {expected}",
            technical_message=(
                f"Pixel buffer length {actual} does not match 3*{width}*{height}={expected}"
            ),
        )
        self.expected = expected
        self.actual = actual
        self.width = width
        self.height = height
