"""Configuration commands."""

import logging
from typing import Optional

import click
from pydantic import ValidationError

from lockswitch.exceptions import wrap_pydantic_error
from lockswitch.models import DEFAULT_CONFIG_PATH, AppConfig

from ..common import load_config, report_error

logger = logging.getLogger(__name__)


def _config_path(ctx: click.Context):
    return ctx.obj.get("config_path") or DEFAULT_CONFIG_PATH


@click.group(name="config")
def config():
    """Show or change lockswitch settings."""
    pass


@config.command(name="show")
@click.pass_context
def show(ctx: click.Context):
    """Display the configuration in effect."""
    click.echo(load_config(ctx).model_dump_json(indent=2))


@config.command(name="path")
@click.pass_context
def path(ctx: click.Context):
    """Print the configuration file location."""
    click.echo(str(_config_path(ctx)))


@config.command(name="set")
@click.option("--reload-interval", type=float, default=None, help="Seconds between status reloads")
@click.option("--max-attempts", type=int, default=None, help="Attempts before a switch is reported as failed")
@click.option("--key", "keys", multiple=True, help="Key to show, repeatable (replaces the list)")
@click.option("--numlockx/--no-numlockx", default=None, help="Also run numlockx for Num Lock")
@click.option("--prepare-scroll-lock/--no-prepare-scroll-lock", default=None, help="Run xmodmap before switching Scroll Lock")
@click.pass_context
def set_config(
    ctx: click.Context,
    reload_interval: Optional[float],
    max_attempts: Optional[int],
    keys: tuple[str, ...],
    numlockx: Optional[bool],
    prepare_scroll_lock: Optional[bool],
):
    """Update configuration values and save them."""
    current = load_config(ctx)
    updates = {
        "reload_interval": reload_interval,
        "max_attempts": max_attempts,
        "keys": list(keys) if keys else None,
        "use_numlockx": numlockx,
        "prepare_scroll_lock": prepare_scroll_lock,
    }
    updates = {field: value for field, value in updates.items() if value is not None}
    if not updates:
        click.echo("Nothing to change.")
        return

    file_path = _config_path(ctx)
    try:
        new_config = AppConfig.model_validate({**current.model_dump(), **updates})
    except ValidationError as e:
        report_error(wrap_pydantic_error(e, str(file_path)))
        ctx.exit(1)

    new_config.save(file_path)
    logger.info(f"Config updated: {updates}")
    for field, value in updates.items():
        click.echo(f"  {field} = {value}")


@config.command(name="reset")
@click.pass_context
def reset(ctx: click.Context):
    """Restore the default configuration."""
    AppConfig().save(_config_path(ctx))
    click.echo("Configuration reset to defaults.")
