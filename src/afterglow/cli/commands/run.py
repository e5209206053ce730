"""Run command - drives the LED strip from a camera."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from afterglow.cli.utils import echo_error, setup_logging
from afterglow.exceptions import AfterglowError, ErrorContext


logger = logging.getLogger(__name__)


@click.command()
@click.option('--leds', '-n', 'led_count', type=int, default=None,
              help='Number of LEDs on the strip')
@click.option('--camera', '-c', 'camera_index', type=int, default=None,
              help='OpenCV capture device index')
@click.option('--width', 'frame_width', type=int, default=None,
              help='Requested capture width')
@click.option('--height', 'frame_height', type=int, default=None,
              help='Requested capture height')
@click.option('--fps', type=float, default=None,
              help='Output frame rate (default: capture frame rate)')
@click.option('--spi-bus', type=int, default=None, help='SPI bus number')
@click.option('--spi-device', type=int, default=None, help='SPI chip-select number')
@click.option('--spi-speed', 'spi_speed_hz', type=int, default=None, help='SPI clock in Hz')
@click.option('--workers', '-w', type=int, default=None,
              help='Aggregator worker threads')
@click.option(
    '--empty-segments',
    'empty_segment_policy',
    type=click.Choice(['black', 'hold'], case_sensitive=False),
    default=None,
    help='Color of segments with no pixels: black, or hold the previous color'
)
@click.option('--frames', type=int, default=None,
              help='Stop after this many frames (default: run until Ctrl+C)')
@click.option('--dry-run', is_flag=True,
              help='Capture and encode, but do not write to the SPI bus')
@click.pass_context
def run(
    ctx,
    led_count: Optional[int],
    camera_index: Optional[int],
    frame_width: Optional[int],
    frame_height: Optional[int],
    fps: Optional[float],
    spi_bus: Optional[int],
    spi_device: Optional[int],
    spi_speed_hz: Optional[int],
    workers: Optional[int],
    empty_segment_policy: Optional[str],
    frames: Optional[int],
    dry_run: bool,
):
    """
    Sample the camera and drive the APA102 strip.

    Options given here override the configuration file for this run.

    \b
    Examples:
      # 36 LEDs on /dev/spidev0.0, first camera
      afterglow run --leds 36

      # Try it out without a strip attached
      afterglow -v run --dry-run --frames 100
    """
    # Lazy imports keep --help fast and free of OpenCV
    from afterglow.capture import OpenCVFrameSource
    from afterglow.core import AmbilightController
    from afterglow.models import AppConfig
    from afterglow.transport import MemoryTransport, SpiTransport

    options = ctx.obj or {}
    log_path = setup_logging(
        options.get('verbose', 0),
        options.get('debug', False),
        options.get('log_file'),
        options.get('log_level', 'INFO'),
    )
    config_path: Optional[Path] = options.get('config_path')

    logger.info("Starting afterglow")

    controller = None
    try:
        config = AppConfig.load_or_default(config_path).with_overrides(
            led_count=led_count,
            camera_index=camera_index,
            frame_width=frame_width,
            frame_height=frame_height,
            fps=fps,
            spi_bus=spi_bus,
            spi_device=spi_device,
            spi_speed_hz=spi_speed_hz,
            workers=workers,
            empty_segment_policy=empty_segment_policy,
        )

        with ErrorContext("open capture device", logger_instance=logger):
            source = OpenCVFrameSource(
                camera_index=config.camera_index,
                width=config.frame_width,
                height=config.frame_height,
                fps=config.fps,
            )

        if dry_run:
            logger.info("Dry run: SPI output disabled")
            transport = MemoryTransport()
        else:
            try:
                with ErrorContext("open SPI bus", logger_instance=logger):
                    transport = SpiTransport(
                        bus=config.spi_bus,
                        device=config.spi_device,
                        speed_hz=config.spi_speed_hz,
                        mode=config.spi_mode,
                    )
            except AfterglowError:
                source.close()
                raise

        controller = AmbilightController(
            source=source,
            transport=transport,
            num_leds=config.led_count,
            policy=config.empty_segment_policy,
            workers=config.workers,
            fps=config.fps,
        )
        controller.run(max_frames=frames)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running afterglow")
        echo_error(e, log_path)
        sys.exit(1)
    finally:
        if controller is not None:
            controller.close()
