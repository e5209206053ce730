"""Configuration-related exceptions.

This module defines exceptions for configuration errors:
- ConfigurationError: Base class for configuration errors
- ConfigFileInvalidError: Config file has invalid syntax
- ConfigValidationError: Config values fail validation
- InvalidLedCountError: LED count is not a positive integer
- InvalidFrameSizeError: Frame dimensions are not positive
"""

from typing import Any, Optional

from .base import AfterglowError


class ConfigurationError(AfterglowError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file has invalid JSON syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid config file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = "Check for common JSON errors:\n"
        recovery += "  - Trailing commas (remove commas after last item)\n"
        recovery += "  - Missing quotes around strings\n"
        recovery += "  - Unclosed braces or brackets\n"
        recovery += f"  - Edit: {file_path}"

        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow commas after the last item in an object or array"
            )
        elif "expecting" in parse_error.lower():
            user_msg = "Configuration file has a syntax error"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """Configuration values fail validation."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Initialize config validation error.

        Args:
            field: The configuration field that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            file_path: Path to the config file (optional)
        """
        user_msg = f"Invalid configuration value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value in your configuration"
        if file_path:
            recovery += f"\nConfig file: {file_path}"

        if "led_count" in field.lower():
            recovery += "\nThe LED count must match the number of LEDs on the strip (at least 1)"
        elif "spi" in field.lower():
            recovery += "\nCheck /dev/spidev* for the available bus and device numbers"
        elif "policy" in field.lower():
            recovery += "\nValid policies: black, hold"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config validation failed for {field}={value}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.field = field
        self.value = value
        self.file_path = file_path


class InvalidLedCountError(ConfigurationError, ValueError):
    """LED count must be a positive integer."""

    def __init__(self, led_count: int):
        super().__init__(
            user_message=f"Invalid LED count: {led_count}",
            technical_message=f"LED count must be >= 1, got {led_count!r}",
            recovery_hint="Set led_count to the number of LEDs on the strip (at least 1)",
        )
        self.led_count = led_count


class InvalidFrameSizeError(ConfigurationError, ValueError):
    """Frame dimensions must both be positive."""

    def __init__(self, width: int, height: int):
        super().__init__(
            user_message=f"Invalid frame size: {width}x{height}",
            technical_message=f"Frame width and height must be > 0, got {width!r}x{height!r}",
        )
        self.width = width
        self.height = height
