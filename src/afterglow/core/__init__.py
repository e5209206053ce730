"""Core control loop."""

from .controller import AmbilightController

__all__ = ["AmbilightController"]
