"""Asyncio subprocess implementation of `CommandExecutor`."""

import asyncio
import logging

from lockswitch.exceptions import ExecError
from lockswitch.protocols import CommandResult

logger = logging.getLogger(__name__)


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


class SubprocessExecutor:
    """
    Spawns programs with `asyncio.create_subprocess_exec`, capturing stdout and stderr.

    No shell is involved; arguments are passed as-is.
    """

    async def execute(self, command: str, *args: str) -> CommandResult:
        """
        Run a program and wait for it to exit.

        Raises:
            ExecError: If the process exits with a non-zero status, or cannot
                be spawned (``exit_code`` is None in that case)
        """
        cmdline = (command, *args)
        logger.debug(f"Executing: {' '.join(cmdline)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmdline,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExecError(cmdline, None, None, str(e)) from e

        raw_stdout, raw_stderr = await proc.communicate()
        stdout, stderr = _decode(raw_stdout), _decode(raw_stderr)

        if proc.returncode != 0:
            raise ExecError(cmdline, proc.returncode, stdout, stderr)

        if stderr:
            logger.warning(f"{' '.join(cmdline)}: {stderr.strip()}")
        return CommandResult(stdout=stdout, stderr=stderr)
