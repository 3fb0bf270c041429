"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from lockswitch import __version__

from .commands import config, reset_keymap, set_key, status, toggle, watch

logger = logging.getLogger(__name__)


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, log DEBUG to ./lockswitch-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level for a custom log file (DEBUG/INFO/WARNING/ERROR)

    Returns:
        The log file in use
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    if debug and not log_file:
        log_path = Path.cwd() / "lockswitch-debug.log"
    elif log_file:
        log_path = log_file
    else:
        log_dir = Path.home() / ".lockswitch" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "lockswitch.log"

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="lockswitch")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.lockswitch/config.json)",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)")
@click.option("--debug", is_flag=True, help="Enable debug mode (DEBUG level, logs to ./lockswitch-debug.log)")
@click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Custom log file path")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for --log-file (default: INFO)",
)
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
):
    """
    lockswitch - Num Lock and Scroll Lock switches that stay in sync.

    Keys are switched with xset (plus numlockx and xmodmap where needed),
    retrying until the keyboard reports the requested state.

    \b
    Examples:
      # Show key states
      lockswitch status

      # Turn Num Lock on
      lockswitch set "Num Lock" on

      # Follow changes made by physical key presses
      lockswitch watch

      # Enable debug logging
      lockswitch --debug status
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(status)
cli.add_command(set_key)
cli.add_command(toggle)
cli.add_command(watch)
cli.add_command(reset_keymap)
cli.add_command(config)

if __name__ == "__main__":
    cli()
