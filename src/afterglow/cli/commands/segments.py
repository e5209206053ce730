"""Segments command - inspect the pixel-to-LED mapping."""

import click

from afterglow.geometry import build_segment_map


@click.command()
@click.option('--leds', '-n', 'led_count', type=click.IntRange(min=1), required=True,
              help='Number of LEDs on the strip')
@click.option('--width', type=click.IntRange(min=1), required=True, help='Frame width')
@click.option('--height', type=click.IntRange(min=1), required=True, help='Frame height')
def segments(led_count, width, height):
    """
    Show how many pixels feed each LED at a given frame size.

    LEDs with no pixels are flagged; with too many LEDs for a small frame
    some segments end up empty and follow the empty-segment policy.
    """
    segment_map = build_segment_map(led_count, width, height)
    counts = segment_map.counts()
    mapped = int(counts.sum())
    total = len(segment_map)

    click.echo(f"{led_count} LEDs, {width}x{height} frame")
    click.echo(f"Mapped pixels: {mapped} of {total} ({total - mapped} in dead zone)\n")

    for index, count in enumerate(counts.tolist()):
        marker = "  <- empty" if count == 0 else ""
        click.echo(f"  [{index:>3}] {count:>8}{marker}")

    empty = segment_map.empty_segments()
    if empty:
        click.echo(f"\n{len(empty)} empty segment(s): {', '.join(map(str, empty))}")
