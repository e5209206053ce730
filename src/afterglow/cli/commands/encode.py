"""Encode command - print the APA102 bytes for a list of colors."""

import click

from afterglow.led import FrameKind, LedStrip, make_data_frames
from afterglow.models import LedColor


def _parse_color(ctx, param, values):
    colors = []
    for value in values:
        try:
            colors.append(LedColor.from_hex(value))
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from e
    return colors


@click.command()
@click.argument('colors', nargs=-1, required=True, callback=_parse_color)
@click.option('--frames', 'show_frames', is_flag=True,
              help='Print one line per 4-byte frame')
def encode(colors, show_frames):
    """
    Print the APA102 byte stream for COLORS (hex, e.g. 4B8040 or '#FF0000').

    \b
    Example:
      $ afterglow encode 4B8040
      00 00 00 00 ff 40 80 4b ff ff ff ff
    """
    strip = LedStrip.from_colors(colors)

    if not show_frames:
        click.echo(strip.serialize().hex(' '))
        return

    for frame in make_data_frames(strip.colors):
        label = frame.kind.value
        if frame.kind is FrameKind.LED:
            label = f"led #{frame.r:02X}{frame.g:02X}{frame.b:02X}"
        click.echo(f"{frame.to_bytes().hex(' ')}  {label}")
