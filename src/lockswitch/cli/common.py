"""Helpers shared by the CLI commands."""

import asyncio
import logging
import sys
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, Optional, TypeVar

import click

from lockswitch.exceptions import ConfigurationError, LockSwitchError, format_error_for_display
from lockswitch.models import AppConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_config(ctx: click.Context) -> AppConfig:
    """Load the config selected with ``--config`` (or the default one), exiting on invalid files."""
    path: Optional[Path] = ctx.obj.get("config_path") if ctx.obj else None
    try:
        return AppConfig.load_or_default(path)
    except ConfigurationError as e:
        logger.error(f"Could not load config: {e.technical_message}")
        report_error(e)
        sys.exit(1)


def report_error(error: Exception) -> None:
    """Print an error the way the CLI shows all failures, without a traceback."""
    if isinstance(error, LockSwitchError):
        message = error.get_full_message()
    else:
        message, _ = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {message}", err=True)
    click.echo("=" * 70, err=True)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a coroutine on a fresh event loop, exiting with status 1 on known errors.

    Only `LockSwitchError`s are shown as friendly messages; anything else is
    a bug and propagates.
    """
    try:
        return asyncio.run(coro)
    except LockSwitchError as e:
        logger.error(f"Command failed: {e.technical_message}")
        report_error(e)
        sys.exit(1)


def parse_state(value: str) -> bool:
    return value.lower() == "on"


def format_state(state: Optional[bool]) -> str:
    if state is None:
        return "unknown"
    return "on" if state else "off"
