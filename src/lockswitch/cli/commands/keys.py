"""Key status and switching commands."""

import asyncio
import logging
from datetime import datetime

import click

from lockswitch.keyboard import KEY_NAMES, Status
from lockswitch.models import AppConfig
from lockswitch.panel import KeyPanel, KeySwitch
from lockswitch.protocols import SwitchEvent

from ..common import format_state, load_config, parse_state, run

logger = logging.getLogger(__name__)

KEY_CHOICE = click.Choice(KEY_NAMES, case_sensitive=False)


def _canonical(name: str) -> str:
    return next(key for key in KEY_NAMES if key.lower() == name.lower())


@click.command(name="status")
@click.pass_context
def status(ctx: click.Context):
    """Show the current state of every key reported by xset."""
    config = load_config(ctx)

    async def query() -> list[Status]:
        async with KeyPanel(config) as panel:
            return await panel.reloader.query()

    statuses = run(query())
    if not statuses:
        click.echo("No key status reported by xset.")
        return

    for item in statuses:
        click.echo(f"  [{item.id:>2}] {item.name:<12} {item.state}")


async def _switch(config: AppConfig, name: str, state: bool | None) -> bool:
    async with KeyPanel(config) as panel:
        return await panel.switch(name).toggle(state)


@click.command(name="set")
@click.argument("key", type=KEY_CHOICE)
@click.argument("state", type=click.Choice(["on", "off"], case_sensitive=False))
@click.pass_context
def set_key(ctx: click.Context, key: str, state: str):
    """
    Turn KEY on or off.

    \b
    Examples:
      lockswitch set "Num Lock" on
      lockswitch set "scroll lock" off
    """
    name = _canonical(key)
    result = run(_switch(load_config(ctx), name, parse_state(state)))
    click.echo(f"{name} is {format_state(result)}")


@click.command(name="toggle")
@click.argument("key", type=KEY_CHOICE)
@click.pass_context
def toggle(ctx: click.Context, key: str):
    """Flip the state of KEY."""
    name = _canonical(key)
    result = run(_switch(load_config(ctx), name, None))
    click.echo(f"{name} is {format_state(result)}")


@click.command(name="reset-keymap")
@click.pass_context
def reset_keymap(ctx: click.Context):
    """Bind Scroll Lock to a modifier so its LED can be switched."""
    config = load_config(ctx)

    async def reset() -> None:
        async with KeyPanel(config) as panel:
            await panel.reset_keymap()

    run(reset())
    click.echo("Scroll Lock keymap reset.")


class WatchPrinter:
    """Prints switch events as they happen."""

    def on_switch_event(self, event: SwitchEvent, switch: KeySwitch) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        if event is SwitchEvent.STATE_CHANGED:
            click.echo(f"[{timestamp}] {switch.name}: {format_state(switch.state)}")
        else:
            click.echo(f"[{timestamp}] {switch.name}: switch failed", err=True)


@click.command(name="watch")
@click.pass_context
def watch(ctx: click.Context):
    """
    Print key state changes until interrupted.

    Changes made outside lockswitch (physical key presses, other programs)
    show up within one reload interval.

    Press Ctrl+C to stop watching.
    """
    config = load_config(ctx)
    printer = WatchPrinter()

    async def watch_forever() -> None:
        panel = KeyPanel(config)
        try:
            for switch in panel.switches:
                switch.add_listener(printer, WatchPrinter.on_switch_event)
            await panel.reload()
            await asyncio.Event().wait()
        finally:
            panel.destroy()

    click.echo(f"Watching {', '.join(config.keys)} every {config.reload_interval}s")
    click.echo("Press Ctrl+C to stop\n")
    try:
        run(watch_forever())
    except KeyboardInterrupt:
        logger.info("Watch interrupted by user")
        click.echo("\nStopping watch...")
