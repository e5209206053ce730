"""Shared CLI helpers: logging setup and error display."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from afterglow.exceptions import format_error_for_display

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".afterglow" / "logs"
DEBUG_LOG_NAME = "afterglow-debug.log"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Pick the log file: --log-file, ./afterglow-debug.log with --debug, else ~/.afterglow/logs."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / DEBUG_LOG_NAME
    return LOG_DIR / "afterglow.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    # The loop has no UI of its own, so -v also mirrors the log to stderr
    if verbose > 0:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


def echo_error(error: Exception, log_path: Optional[Path] = None) -> None:
    """Print a formatted error (and recovery hint) to stderr."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path is not None:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
        click.echo("For logging options, run: afterglow --help", err=True)
