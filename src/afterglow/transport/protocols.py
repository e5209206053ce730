"""Bus transport protocol."""

from typing import Protocol


class BusTransport(Protocol):
    """Protocol for anything that can clock bytes out to the strip."""

    def write(self, data: bytes) -> None:
        """
        Send an opaque byte sequence.

        Raises:
            TransportError: If the write fails
        """
        ...

    def close(self) -> None:
        """Release the bus."""
        ...
