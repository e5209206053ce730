"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import numpy as np
import pytest

from afterglow.capture import Frame, StaticFrameSource
from afterglow.models import LedColor
from afterglow.transport import MemoryTransport


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def random_frame(rng):
    """A 64x48 frame of random pixels."""
    pixels = rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)
    return Frame.from_array(pixels)


@pytest.fixture
def solid_frame():
    """A 16x16 frame filled with a single color."""
    return Frame.solid(16, 16, (75, 128, 64))


@pytest.fixture
def static_source(solid_frame):
    """Frame source replaying the solid frame."""
    return StaticFrameSource([solid_frame], fps=30.0)


@pytest.fixture
def memory_transport():
    """Transport that records writes."""
    return MemoryTransport()


@pytest.fixture
def red():
    return LedColor(r=255, g=0, b=0)


@pytest.fixture
def no_sleep():
    """Patch the control loop's sleep so tests run instantly."""
    with patch("afterglow.core.controller.time.sleep") as mock_sleep:
        yield mock_sleep
