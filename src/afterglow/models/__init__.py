"""Data models for afterglow."""

from .color import LedColor
from .config import DEFAULT_CONFIG_PATH, AppConfig
from .enums import EmptySegmentPolicy

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    # Enums
    "EmptySegmentPolicy",
    # Models
    "LedColor",
]
