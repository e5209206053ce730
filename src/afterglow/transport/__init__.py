"""Bus transports."""

from .memory import MemoryTransport
from .protocols import BusTransport
from .spi import SpiTransport

__all__ = ["BusTransport", "MemoryTransport", "SpiTransport"]
