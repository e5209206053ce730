"""Color model for LED control."""

from pydantic import BaseModel, ConfigDict, Field


class LedColor(BaseModel):
    """Standard 8-bit RGB color of a single LED.

    The model is frozen so that colors are hashable and can be shared
    between the strip and the aggregator without copying.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "LedColor":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_word(cls, word: int) -> "LedColor":
        """Create a color from a packed 0xRRGGBB integer.

        Bits above the low 24 are ignored.

        Example:
            >>> LedColor.from_word(0x4B8040)
            LedColor(r=75, g=128, b=64)
        """
        return cls(r=(word >> 16) & 0xFF, g=(word >> 8) & 0xFF, b=word & 0xFF)

    @classmethod
    def from_hex(cls, value: str) -> "LedColor":
        """Parse a '#RRGGBB' or 'RRGGBB' hex string.

        Raises:
            ValueError: If the string is not six hex digits
        """
        digits = value.strip().removeprefix("#")
        if len(digits) != 6 or any(c not in "0123456789abcdefABCDEF" for c in digits):
            raise ValueError(f"Expected 6 hex digits, got {value!r}")
        return cls.from_word(int(digits, 16))

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_word(self) -> int:
        """Pack into a 0xRRGGBB integer."""
        return (self.r << 16) | (self.g << 8) | self.b

    def to_hex(self) -> str:
        """Convert to hex color string (e.g., '#FF0000')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
