"""
APA102 data frame encoder.

APA102 Framing
==============

APA102 (and compatible "DotStar") LEDs are driven over a two-wire clocked
serial bus (SPI). The host sends a stream of 32-bit frames::

    [START] [LED 0] [LED 1] ... [LED N-1] [END] ... [END]

    START   00 00 00 00
    LED     FF  B  G  R          first byte: 0b111 + 5-bit global brightness
    END     FF FF FF FF          repeated (N + 1) // 2 times

Each chip forwards the data it does not consume with half a clock cycle of
delay, so the tail needs at least N / 2 extra clock edges to push data all
the way down the strip. One END frame provides 32 edges, which makes
``(N + 1) // 2`` frames enough for any N.

The LED frame carries its color channels in blue, green, red order. The
brightness byte is always 0xFF (full brightness); dimming is not exposed
at this layer.

Example
-------

One LED set to r=75, g=128, b=64::

    encode([LedColor(r=75, g=128, b=64)])
    00 00 00 00   FF 40 80 4B   FF FF FF FF
    └─ start ─┘   └── LED ──┘   └── end ──┘

Key Design Principle
--------------------

This module is pure: it turns an ordered color sequence into bytes. It
never talks to the bus and keeps no state. LedStrip caches its output and
the transport sends it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from afterglow.models import LedColor

FRAME_SIZE = 4
BRIGHTNESS_BYTE = 0xFF
START_BYTES = bytes(FRAME_SIZE)
END_BYTES = b"\xff" * FRAME_SIZE


def _led_bytes(r: int, g: int, b: int) -> bytes:
    return bytes((BRIGHTNESS_BYTE, b, g, r))


class FrameKind(Enum):
    """APA102 frame types."""

    START = "start"
    END = "end"
    LED = "led"


@dataclass(frozen=True, slots=True)
class DataFrame:
    """A single 4-byte APA102 frame."""

    kind: FrameKind
    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def start(cls) -> "DataFrame":
        return cls(FrameKind.START)

    @classmethod
    def end(cls) -> "DataFrame":
        return cls(FrameKind.END)

    @classmethod
    def led(cls, r: int, g: int, b: int) -> "DataFrame":
        for channel in (r, g, b):
            if not 0 <= channel <= 255:
                raise ValueError(f"Channel value {channel} outside 0-255")
        return cls(FrameKind.LED, r, g, b)

    @classmethod
    def from_color(cls, color: LedColor) -> "DataFrame":
        return cls(FrameKind.LED, color.r, color.g, color.b)

    @classmethod
    def from_word(cls, word: int) -> "DataFrame":
        """
        Build an LED frame from a 32-bit word as it appears on the wire.

        The top byte is the brightness byte and is ignored.

        Example:
            >>> DataFrame.from_word(0xFF4B8040)
            DataFrame(kind=<FrameKind.LED: 'led'>, r=64, g=128, b=75)
        """
        _, b, g, r = (word & 0xFFFFFFFF).to_bytes(4, "big")
        return cls(FrameKind.LED, r, g, b)

    def to_bytes(self) -> bytes:
        """Encode this frame into its 4 wire bytes."""
        if self.kind is FrameKind.START:
            return START_BYTES
        if self.kind is FrameKind.END:
            return END_BYTES
        return _led_bytes(self.r, self.g, self.b)

    def to_word(self) -> int:
        """The frame's wire bytes read as a big-endian 32-bit word."""
        return int.from_bytes(self.to_bytes(), "big")


def end_frame_count(num_leds: int) -> int:
    """Number of END frames needed to clock data through num_leds chips."""
    return (num_leds + 1) // 2


def make_data_frames(colors: Sequence[LedColor]) -> list[DataFrame]:
    """
    Build the frame sequence for a strip.

    An empty color sequence produces no frames at all.
    """
    if not colors:
        return []

    frames = [DataFrame.start()]
    frames.extend(DataFrame.from_color(color) for color in colors)
    frames.extend(DataFrame.end() for _ in range(end_frame_count(len(colors))))
    return frames


def encode_frames(frames: Iterable[DataFrame]) -> bytes:
    return b"".join(frame.to_bytes() for frame in frames)


def encode(colors: Sequence[LedColor]) -> bytes:
    """
    Encode an ordered color sequence into the APA102 byte stream.

    Args:
        colors: One color per LED, in strip order

    Returns:
        START + one LED frame per color + (N + 1) // 2 END frames
    """
    if not colors:
        return b""

    out = bytearray(START_BYTES)
    for color in colors:
        out += _led_bytes(color.r, color.g, color.b)
    out += END_BYTES * end_frame_count(len(colors))
    return bytes(out)
