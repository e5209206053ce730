"""Application configuration model."""

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from afterglow.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

from .enums import EmptySegmentPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".afterglow" / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings.

    The file is read at startup and never written back; command-line
    flags override individual fields for a single run.
    """

    # Strip
    led_count: int = Field(default=36, ge=1, description="Number of LEDs on the strip")
    empty_segment_policy: EmptySegmentPolicy = Field(
        default=EmptySegmentPolicy.BLACK,
        description="Color of a segment that no pixel maps onto (black or hold)",
    )

    # Capture
    camera_index: int = Field(default=0, ge=0, description="OpenCV capture device index")
    frame_width: Optional[int] = Field(
        default=None, gt=0, description="Requested capture width (None = device default)"
    )
    frame_height: Optional[int] = Field(
        default=None, gt=0, description="Requested capture height (None = device default)"
    )
    fps: Optional[float] = Field(
        default=None, gt=0, description="Output rate override (None = capture frame rate)"
    )

    # SPI bus
    spi_bus: int = Field(default=0, ge=0, description="SPI bus number")
    spi_device: int = Field(default=0, ge=0, description="SPI chip-select number")
    spi_speed_hz: int = Field(default=16_000_000, gt=0, description="SPI clock in Hz")
    spi_mode: int = Field(default=0, ge=0, le=3, description="SPI mode (0-3)")

    # Processing
    workers: int = Field(default=1, ge=1, description="Aggregator worker threads")

    @classmethod
    def load(cls, path: Path) -> "AppConfig":
        """
        Load and validate configuration from a JSON file.

        Args:
            path: Path to the JSON file

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid
            ConfigValidationError: If values fail validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            json_content = path.read_text()
        except OSError as e:
            raise ConfigFileInvalidError(str(path), f"Unreadable file: {e}") from e

        if not json_content.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            config = cls.model_validate_json(json_content)
        except ValidationError as e:
            logger.error(f"Validation error loading config from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {cls.__name__} from {path}")
        return config

    @classmethod
    def load_or_default(cls, path: Optional[Path] = None) -> "AppConfig":
        """
        Load config from file or return defaults if the file is missing.

        Args:
            path: Path to config file. If None, uses ~/.afterglow/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        try:
            return cls.load(path)
        except FileNotFoundError:
            logger.info(f"No config file at {path}, using defaults")
            return cls()

    def with_overrides(self, **overrides: Any) -> "AppConfig":
        """
        Return a copy with the given fields replaced.

        Overrides set to None are ignored, so unset CLI flags can be passed
        straight through.

        Raises:
            ConfigValidationError: If an override fails validation
        """
        updates = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(updates) - set(type(self).model_fields)
        if unknown:
            raise ConfigurationError(
                user_message=f"Unknown configuration fields: {', '.join(sorted(unknown))}"
            )
        if not updates:
            return self

        try:
            return type(self).model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise wrap_pydantic_error(e, "command line") from e
