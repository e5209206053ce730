"""Config command - show the effective configuration."""

import sys

import click

from afterglow.cli.utils import echo_error
from afterglow.exceptions import AfterglowError
from afterglow.models import DEFAULT_CONFIG_PATH, AppConfig


@click.command()
@click.option('--field', '-f', type=str, default=None, help='Show a single field')
@click.option('--json', 'as_json', is_flag=True, help='Print the configuration as JSON')
@click.pass_context
def config(ctx, field, as_json):
    """
    Show the configuration afterglow would run with.

    Reads ~/.afterglow/config.json (or --config) and fills in defaults for
    anything it does not set.
    """
    config_path = (ctx.obj or {}).get('config_path') or DEFAULT_CONFIG_PATH

    try:
        config_obj = AppConfig.load_or_default(config_path)
    except AfterglowError as e:
        echo_error(e)
        sys.exit(1)

    if field is not None:
        if field not in AppConfig.model_fields:
            raise click.BadParameter(
                f"Unknown field '{field}'. Valid fields: {', '.join(AppConfig.model_fields)}",
                param_hint='--field',
            )
        value = getattr(config_obj, field)
        click.echo(getattr(value, 'value', value))
        return

    if as_json:
        click.echo(config_obj.model_dump_json(indent=2))
        return

    source = config_path if config_path.exists() else "defaults (no config file)"
    click.echo(f"Configuration from: {source}\n")
    for name, info in AppConfig.model_fields.items():
        value = getattr(config_obj, name)
        value = getattr(value, 'value', value)
        click.echo(f"  {name:<22} {value!s:<14} {info.description or ''}")
