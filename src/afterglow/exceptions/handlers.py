"""
Centralized error handling utilities.

| Scenario | Use This |
|----------|----------|
| Config file syntax error | `ConfigFileInvalidError` |
| Config value invalid | `ConfigValidationError` (via `wrap_pydantic_error`) |
| Critical section with auto-logging | `with ErrorContext("open camera"): ...` |
| SPI open/write failed | `wrap_spi_error(e, device)` |
| Show an error in the CLI | `format_error_for_display(e)` |

Each layer translates errors to be more useful at the next level up:
the collaborators (camera, SPI) raise DeviceError subclasses, the core
raises AfterglowError subclasses for misuse, and the CLI formats them.
"""

import errno
import logging
from typing import Optional

from .base import AfterglowError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import TransportError


logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("open capture device", logger_instance=logger):
            source = OpenCVFrameSource(camera_index=0)
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, AfterglowError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> AfterglowError:
    """
    Convert Pydantic validation errors to afterglow exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    message = str(error)

    # Valid JSON is a precondition for field validation
    if "json_invalid" in message or "Invalid JSON" in message:
        parse_error = message
        if "Invalid JSON:" in message:
            parse_error = message.split("Invalid JSON:", 1)[1].split("[type=", 1)[0].strip()
        return ConfigFileInvalidError(file_path, parse_error)

    if not isinstance(error, ValidationError) or not error.errors():
        return ConfigValidationError("unknown", None, message, file_path=file_path)

    details = error.errors()
    if len(details) == 1:
        detail = details[0]
        return ConfigValidationError(
            _field_name(detail),
            detail.get("input"),
            detail.get("msg", "validation failed"),
            file_path=file_path,
        )

    lines = [f"  - {_field_name(d)}: {d.get('msg', 'validation failed')}" for d in details]
    return ConfigValidationError(
        "multiple fields",
        None,
        f"{len(details)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def _field_name(detail: dict) -> str:
    return ".".join(str(part) for part in detail.get("loc", ("unknown",)))


def wrap_spi_error(error: OSError, device: str) -> TransportError:
    """
    Convert an OSError from spidev into a TransportError with a useful hint.

    Args:
        error: The error raised by open() or a write
        device: Device path, e.g. "/dev/spidev0.0"
    """
    if error.errno == errno.ENOENT:
        hint = (
            f"{device} does not exist. Enable SPI (e.g. dtparam=spi=on on a "
            "Raspberry Pi) and check --spi-bus/--spi-device."
        )
    elif error.errno in (errno.EACCES, errno.EPERM):
        hint = f"No permission to open {device}. Add the user to the 'spi' group."
    else:
        hint = None
    return TransportError(device, str(error), recovery_hint=hint)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, AfterglowError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
