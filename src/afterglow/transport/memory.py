"""In-memory transport."""

import logging

logger = logging.getLogger(__name__)


class MemoryTransport:
    """Record written payloads instead of sending them. Used by --dry-run and tests."""

    def __init__(self, max_history: int = 64):
        self.max_history = max_history
        self.writes: list[bytes] = []
        self.write_count = 0
        self.closed = False

    @property
    def last_write(self) -> bytes | None:
        return self.writes[-1] if self.writes else None

    def write(self, data: bytes) -> None:
        self.writes.append(bytes(data))
        if len(self.writes) > self.max_history:
            del self.writes[0]
        self.write_count += 1
        logger.debug(f"Captured {len(data)} bytes (write #{self.write_count})")

    def close(self) -> None:
        self.closed = True
