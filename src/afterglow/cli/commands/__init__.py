"""CLI commands for afterglow."""

from .config import config
from .encode import encode
from .run import run
from .segments import segments
