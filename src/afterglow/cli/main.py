"""Main CLI entry point."""

import logging
from pathlib import Path
from typing import Optional

import click

from afterglow import __version__

from .commands import config, encode, run, segments

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="afterglow")
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Configuration file (default: ~/.afterglow/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./afterglow-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@click.pass_context
def cli(
    ctx,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Afterglow - camera-driven ambient lighting for APA102 LED strips.

    Samples the border of each video frame, averages it into one color per
    LED and clocks the result out over SPI.

    \b
    Examples:
      # Run with the configuration file and defaults
      afterglow run

      # 60 LEDs, second camera, debug logging
      afterglow --debug run --leds 60 --camera 1

      # Inspect the pixel mapping for a 640x480 camera
      afterglow segments --leds 36 --width 640 --height 480

      # Show the bytes sent for two LEDs
      afterglow encode FF0000 0000FF
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        verbose=verbose,
        debug=debug,
        log_file=log_file,
        log_level=log_level,
    )


cli.add_command(run)
cli.add_command(config)
cli.add_command(encode)
cli.add_command(segments)

if __name__ == "__main__":
    cli()
