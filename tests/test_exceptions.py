"""Tests for the exception hierarchy and error handling utilities."""

import errno
import logging
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from afterglow.exceptions import (
    AfterglowError,
    CaptureDeviceError,
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    DeviceError,
    ErrorContext,
    FrameSizeMismatchError,
    InvalidFrameSizeError,
    InvalidLedCountError,
    LedIndexError,
    TransportError,
    format_error_for_display,
    wrap_pydantic_error,
    wrap_spi_error,
)
from afterglow.models import AppConfig


class TestAfterglowError:
    """Base exception behavior."""

    @pytest.mark.unit
    def test_messages(self):
        error = AfterglowError("Short", technical_message="Long", recovery_hint="Try again")

        assert str(error) == "Short"
        assert error.technical_message == "Long"
        assert error.get_full_message() == "Short\n\nSuggestion: Try again"

    @pytest.mark.unit
    def test_technical_defaults_to_user(self):
        error = AfterglowError("Only")
        assert error.technical_message == "Only"
        assert error.get_full_message() == "Only"
        assert not error.recoverable


class TestHierarchy:
    """Subclass relationships."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error,bases",
        [
            (InvalidLedCountError(0), (ConfigurationError, ValueError)),
            (InvalidFrameSizeError(0, 4), (ConfigurationError, ValueError)),
            (LedIndexError(5, 5), (AfterglowError, IndexError)),
            (FrameSizeMismatchError(12, 9, 2, 2), (AfterglowError, ValueError)),
            (CaptureDeviceError(0, "gone"), (DeviceError,)),
            (TransportError("/dev/spidev0.0"), (DeviceError,)),
            (ConfigFileInvalidError("c.json", "oops"), (ConfigurationError,)),
            (ConfigValidationError("led_count", 0, "too small"), (ConfigurationError,)),
        ],
    )
    def test_bases(self, error, bases):
        assert isinstance(error, AfterglowError)
        for base in bases:
            assert isinstance(error, base)

    @pytest.mark.unit
    def test_led_index_message(self):
        error = LedIndexError(36, 36)
        assert error.technical_message == "LED index 36 out of range (valid: 0-35)"

    @pytest.mark.unit
    def test_transport_error_includes_cause(self):
        error = TransportError("/dev/spidev0.1", "Permission denied")
        assert "Permission denied" in error.technical_message
        assert "/dev/spidev0.1" in error.recovery_hint


class TestConfigFileInvalidError:
    """Parse error classification."""

    @pytest.mark.unit
    def test_trailing_comma(self):
        error = ConfigFileInvalidError("c.json", "trailing comma at line 3 column 1")
        assert error.user_message == "Configuration file has a trailing comma"

    @pytest.mark.unit
    def test_expecting(self):
        error = ConfigFileInvalidError("c.json", "Expecting value")
        assert error.user_message == "Configuration file has a syntax error"

    @pytest.mark.unit
    def test_other(self):
        error = ConfigFileInvalidError("c.json", "File is empty")
        assert error.user_message == "Configuration file has invalid syntax"
        assert "c.json" in error.recovery_hint


class TestWrapPydanticError:
    """Pydantic ValidationError conversion."""

    @pytest.mark.unit
    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            AppConfig.model_validate_json("{")

        wrapped = wrap_pydantic_error(exc_info.value, "c.json")

        assert isinstance(wrapped, ConfigFileInvalidError)
        assert wrapped.file_path == "c.json"

    @pytest.mark.unit
    def test_single_field(self):
        with pytest.raises(ValidationError) as exc_info:
            AppConfig(spi_mode=7)

        wrapped = wrap_pydantic_error(exc_info.value, "c.json")

        assert isinstance(wrapped, ConfigValidationError)
        assert wrapped.field == "spi_mode"
        assert "/dev/spidev" in wrapped.recovery_hint

    @pytest.mark.unit
    def test_other_exception(self):
        wrapped = wrap_pydantic_error(RuntimeError("boom"), "c.json")
        assert isinstance(wrapped, ConfigValidationError)
        assert wrapped.field == "unknown"


class TestErrorContext:
    """ErrorContext logging and suppression."""

    @pytest.mark.unit
    def test_success(self):
        log = Mock(spec=logging.Logger)
        with ErrorContext("do thing", logger_instance=log) as ctx:
            pass
        assert ctx.error is None
        log.error.assert_not_called()

    @pytest.mark.unit
    def test_re_raises_by_default(self):
        log = Mock(spec=logging.Logger)
        with pytest.raises(LedIndexError):
            with ErrorContext("set LED", logger_instance=log):
                raise LedIndexError(9, 4)
        log.error.assert_called_once_with("Failed to set LED: LED index 9 out of range (valid: 0-3)")

    @pytest.mark.unit
    def test_suppresses(self):
        log = Mock(spec=logging.Logger)
        with ErrorContext("write", logger_instance=log, re_raise=False) as ctx:
            raise OSError("bus gone")
        assert isinstance(ctx.error, OSError)
        log.error.assert_called_once()
        assert log.error.call_args.kwargs["exc_info"] is True


class TestFormatErrorForDisplay:
    """CLI display formatting."""

    @pytest.mark.unit
    def test_app_error(self):
        message, hint = format_error_for_display(CaptureDeviceError(1, "busy"))
        assert message == "Camera 1: busy"
        assert "--camera" in hint

    @pytest.mark.unit
    def test_builtin_error(self):
        message, hint = format_error_for_display(ValueError("bad"))
        assert message == "ValueError: bad"
        assert hint is None


class TestWrapSpiError:
    """OSError translation for the SPI transport."""

    @pytest.mark.unit
    def test_missing_device(self):
        error = wrap_spi_error(FileNotFoundError(errno.ENOENT, "No such file"), "/dev/spidev0.0")

        assert isinstance(error, TransportError)
        assert "dtparam=spi=on" in error.recovery_hint

    @pytest.mark.unit
    def test_permission_denied(self):
        error = wrap_spi_error(PermissionError(errno.EACCES, "Permission denied"), "/dev/spidev0.1")
        assert "'spi' group" in error.recovery_hint
        assert "Permission denied" in error.technical_message

    @pytest.mark.unit
    def test_other_errno_keeps_generic_hint(self):
        error = wrap_spi_error(OSError(errno.EIO, "I/O error"), "/dev/spidev0.0")
        assert "--dry-run" in error.recovery_hint
