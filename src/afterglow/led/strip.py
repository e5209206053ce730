"""LED strip state with cached APA102 serialization."""

import logging
from typing import Iterable, Iterator, Optional, Sequence

from afterglow.exceptions import InvalidLedCountError, LedIndexError
from afterglow.models import LedColor

from .apa102 import encode

logger = logging.getLogger(__name__)


class LedStrip:
    """
    Commanded colors of a fixed-length LED strip.

    The number of LEDs is fixed at construction. Every index and color is checked,
    and a failed access leaves the strip untouched.

    `serialize()` caches the encoded bytes. Any mutation marks the cache
    dirty; the next `serialize()` re-encodes. Calls in between return the
    same bytes object.

    Not thread-safe: the strip belongs to the control loop.
    """

    def __init__(self, num_leds: int):
        """
        Initialize strip with all LEDs off.

        Args:
            num_leds: Number of LEDs (>= 1)

        Raises:
            InvalidLedCountError: If num_leds < 1
        """
        if num_leds < 1:
            raise InvalidLedCountError(num_leds)

        self._colors: list[LedColor] = [LedColor.off()] * num_leds
        self._cache: Optional[bytes] = None
        self._dirty = True

    @classmethod
    def from_colors(cls, colors: Sequence[LedColor]) -> "LedStrip":
        """Create a strip holding the given colors."""
        strip = cls(len(colors))
        strip.update(colors)
        return strip

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[LedColor]:
        return iter(tuple(self._colors))

    @property
    def num_leds(self) -> int:
        return len(self._colors)

    @property
    def colors(self) -> tuple[LedColor, ...]:
        """Snapshot of the current colors."""
        return tuple(self._colors)

    @property
    def is_dirty(self) -> bool:
        """True if the next serialize() will re-encode."""
        return self._dirty

    def _check_index(self, index: int) -> None:
        # Negative indices are rejected rather than wrapped
        if not 0 <= index < len(self._colors):
            raise LedIndexError(index, len(self._colors))

    @staticmethod
    def _check_color(color: LedColor) -> None:
        if not isinstance(color, LedColor):
            raise TypeError(f"Expected LedColor, got {type(color).__name__}")

    def get(self, index: int) -> LedColor:
        """
        Get the color of one LED.

        Raises:
            LedIndexError: If index is outside [0, num_leds)
        """
        self._check_index(index)
        return self._colors[index]

    def set(self, index: int, color: LedColor) -> None:
        """
        Set the color of one LED.

        Raises:
            LedIndexError: If index is outside [0, num_leds)
            TypeError: If color is not a LedColor
        """
        self._check_index(index)
        self._check_color(color)
        self._colors[index] = color
        self._dirty = True

    def update(self, colors: Iterable[LedColor]) -> None:
        """
        Replace every LED color at once.

        Raises:
            ValueError: If the number of colors differs from num_leds
            TypeError: If any entry is not a LedColor
        """
        new_colors = list(colors)
        for color in new_colors:
            self._check_color(color)
        if len(new_colors) != len(self._colors):
            raise ValueError(
                f"Expected {len(self._colors)} colors, got {len(new_colors)}"
            )
        self._colors = new_colors
        self._dirty = True

    def fill(self, color: LedColor) -> None:
        """Set every LED to the same color."""
        self._check_color(color)
        self._colors = [color] * len(self._colors)
        self._dirty = True

    def clear(self) -> None:
        """Turn every LED off."""
        self.fill(LedColor.off())

    def to_words(self) -> list[int]:
        """Current colors packed as 0xRRGGBB integers."""
        return [color.to_word() for color in self._colors]

    def serialize(self) -> bytes:
        """
        Encode the strip into APA102 wire bytes.

        Returns:
            Cached bytes if nothing changed since the last call
        """
        if self._dirty or self._cache is None:
            self._cache = encode(self._colors)
            self._dirty = False
            logger.debug(f"Re-encoded {len(self._colors)} LEDs ({len(self._cache)} bytes)")
        return self._cache

    def __repr__(self) -> str:
        return f"LedStrip(num_leds={len(self._colors)})"
