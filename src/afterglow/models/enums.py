"""Enumerations for afterglow."""

from enum import Enum


class EmptySegmentPolicy(str, Enum):
    """What a segment shows when no pixel of the frame maps onto it."""

    BLACK = "black"  # Turn the LED off
    HOLD = "hold"  # Keep the LED's previous color
