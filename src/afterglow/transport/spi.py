"""SPI bus transport for APA102 strips."""

import logging

from afterglow.exceptions import TransportError, wrap_spi_error

logger = logging.getLogger(__name__)


class SpiTransport:
    """
    Clock bytes out over a Linux spidev device.

    Writes are fire-and-forget: APA102 chips never answer, so nothing is
    read back.
    """

    def __init__(self, bus: int = 0, device: int = 0, speed_hz: int = 16_000_000, mode: int = 0):
        """
        Open /dev/spidev<bus>.<device>.

        Args:
            bus: SPI bus number
            device: Chip-select number
            speed_hz: Clock frequency in Hz
            mode: SPI mode (0-3)

        Raises:
            TransportError: If the device cannot be opened
        """
        from spidev import SpiDev

        self.path = f"/dev/spidev{bus}.{device}"
        self._spi = SpiDev()
        try:
            self._spi.open(bus, device)
            self._spi.max_speed_hz = speed_hz
            self._spi.mode = mode
        except OSError as e:
            self._spi.close()
            raise wrap_spi_error(e, self.path) from e

        self._closed = False
        logger.info(f"Opened {self.path} at {speed_hz} Hz, mode {mode}")

    def write(self, data: bytes) -> None:
        """
        Write bytes to the bus.

        Raises:
            TransportError: If the write fails or the transport is closed
        """
        if self._closed:
            raise TransportError(self.path, "transport is closed")
        try:
            self._spi.writebytes2(data)
        except OSError as e:
            raise wrap_spi_error(e, self.path) from e

    def close(self) -> None:
        if not self._closed:
            self._spi.close()
            self._closed = True
            logger.info(f"Closed {self.path}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
