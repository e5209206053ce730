"""
Custom exception hierarchy for afterglow.

## Exception Hierarchy

```
AfterglowError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   ├── ConfigValidationError
│   ├── InvalidLedCountError      (also ValueError)
│   └── InvalidFrameSizeError     (also ValueError)
├── LedIndexError                 (also IndexError)
├── FrameSizeMismatchError        (also ValueError)
└── DeviceError
    ├── CaptureDeviceError
    └── TransportError
```

## Usage

```python
from afterglow.exceptions import LedIndexError

strip = LedStrip(36)
try:
    strip.set(36, LedColor.off())
except LedIndexError as e:
    logger.error(e.technical_message)  # "LED index 36 out of range (valid: 0-35)"
```

Errors that signal misuse (bad LED count, out-of-range index, wrong buffer
size) also derive from the matching builtin, so generic `except IndexError`
or `except ValueError` handlers keep working.

See `afterglow.exceptions.handlers` for utilities to handle these exceptions.
"""

from .base import AfterglowError
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    InvalidFrameSizeError,
    InvalidLedCountError,
)
from .device import CaptureDeviceError, DeviceError, TransportError
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error, wrap_spi_error
from .strip import FrameSizeMismatchError, LedIndexError

__all__ = [
    # Base
    "AfterglowError",
    # Device
    "CaptureDeviceError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DeviceError",
    # Handlers
    "ErrorContext",
    # Strip
    "FrameSizeMismatchError",
    "InvalidFrameSizeError",
    "InvalidLedCountError",
    "LedIndexError",
    "TransportError",
    "format_error_for_display",
    "wrap_pydantic_error",
    "wrap_spi_error",
]
