"""Tests for data models."""

import json
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from afterglow.exceptions import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from afterglow.models import AppConfig, EmptySegmentPolicy, LedColor


class TestLedColor:
    """Test LedColor model."""

    @pytest.mark.unit
    def test_create(self):
        color = LedColor(r=75, g=128, b=64)
        assert color.to_rgb_tuple() == (75, 128, 64)

    @pytest.mark.unit
    @pytest.mark.parametrize("channels", [{"r": 256, "g": 0, "b": 0}, {"r": 0, "g": -1, "b": 0}])
    def test_rejects_out_of_range(self, channels):
        with pytest.raises(ValidationError):
            LedColor(**channels)

    @pytest.mark.unit
    def test_frozen_and_hashable(self):
        color = LedColor(r=1, g=2, b=3)
        with pytest.raises(ValidationError):
            color.r = 5
        assert len({color, LedColor(r=1, g=2, b=3)}) == 1

    @pytest.mark.unit
    def test_off(self):
        assert LedColor.off() == LedColor(r=0, g=0, b=0)

    @pytest.mark.unit
    def test_word_conversion(self):
        color = LedColor.from_word(0x4B8040)

        assert color == LedColor(r=75, g=128, b=64)
        assert color.to_word() == 0x4B8040

    @pytest.mark.unit
    def test_from_word_ignores_high_bits(self):
        assert LedColor.from_word(0xFF4B8040) == LedColor(r=75, g=128, b=64)

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#4B8040", "4b8040", " 4B8040 "])
    def test_from_hex(self, text):
        assert LedColor.from_hex(text) == LedColor(r=75, g=128, b=64)

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["", "#12345", "GG0000", "1234567"])
    def test_from_hex_invalid(self, text):
        with pytest.raises(ValueError):
            LedColor.from_hex(text)

    @pytest.mark.unit
    def test_to_hex(self):
        assert LedColor(r=255, g=0, b=10).to_hex() == "#FF000A"


class TestAppConfig:
    """Test AppConfig loading and overrides."""

    @pytest.mark.unit
    def test_defaults(self):
        config = AppConfig()

        assert config.led_count == 36
        assert config.empty_segment_policy is EmptySegmentPolicy.BLACK
        assert config.camera_index == 0
        assert config.frame_width is None
        assert config.fps is None
        assert config.spi_speed_hz == 16_000_000
        assert config.workers == 1

    @pytest.mark.unit
    def test_load(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"led_count": 60, "empty_segment_policy": "hold", "workers": 4}))

        config = AppConfig.load(path)

        assert config.led_count == 60
        assert config.empty_segment_policy is EmptySegmentPolicy.HOLD
        assert config.workers == 4

    @pytest.mark.unit
    def test_load_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            AppConfig.load(temp_dir / "missing.json")

    @pytest.mark.unit
    def test_load_or_default_missing_file(self, temp_dir):
        config = AppConfig.load_or_default(temp_dir / "missing.json")
        assert config == AppConfig()

    @pytest.mark.unit
    def test_load_or_default_uses_default_path(self, temp_dir):
        with patch("afterglow.models.config.DEFAULT_CONFIG_PATH", temp_dir / "nope.json"):
            assert AppConfig.load_or_default() == AppConfig()

    @pytest.mark.unit
    def test_trailing_comma(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"led_count": 10,}')

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            AppConfig.load(path)
        assert exc_info.value.file_path == str(path)
        assert exc_info.value.recoverable

    @pytest.mark.unit
    def test_empty_file(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("  \n")

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            AppConfig.load(path)
        assert exc_info.value.parse_error == "File is empty"

    @pytest.mark.unit
    def test_invalid_value(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"led_count": 0}))

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load(path)
        assert exc_info.value.field == "led_count"
        assert exc_info.value.value == 0
        assert "LED count" in exc_info.value.recovery_hint

    @pytest.mark.unit
    def test_multiple_invalid_values(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"led_count": 0, "spi_mode": 9}))

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load(path)
        assert exc_info.value.field == "multiple fields"
        assert "2 validation errors" in exc_info.value.user_message

    @pytest.mark.unit
    def test_invalid_policy(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"empty_segment_policy": "average"}))

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load(path)
        assert "black, hold" in exc_info.value.recovery_hint

    @pytest.mark.unit
    def test_with_overrides(self):
        config = AppConfig().with_overrides(led_count=60, camera_index=None, empty_segment_policy="hold")

        assert config.led_count == 60
        assert config.camera_index == 0
        assert config.empty_segment_policy is EmptySegmentPolicy.HOLD

    @pytest.mark.unit
    def test_with_overrides_returns_same_when_empty(self):
        config = AppConfig()
        assert config.with_overrides(fps=None) is config

    @pytest.mark.unit
    def test_with_overrides_invalid(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig().with_overrides(workers=0)
        assert exc_info.value.file_path == "command line"

    @pytest.mark.unit
    def test_with_overrides_unknown_field(self):
        with pytest.raises(ConfigurationError):
            AppConfig().with_overrides(brightness=10)


class TestEmptySegmentPolicy:
    """Test EmptySegmentPolicy enum."""

    @pytest.mark.unit
    def test_values(self):
        assert EmptySegmentPolicy("black") is EmptySegmentPolicy.BLACK
        assert EmptySegmentPolicy("hold") is EmptySegmentPolicy.HOLD
