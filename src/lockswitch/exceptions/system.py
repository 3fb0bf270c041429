"""External command exceptions.

- SystemCommandError: Base class for external program errors
- ExecError: A program exited with a non-zero status or could not be spawned
- PathError: A program could not be found in PATH
"""

from collections.abc import Sequence

from .base import LockSwitchError


class SystemCommandError(LockSwitchError):
    """An external program could not be used."""
    pass


class ExecError(SystemCommandError):
    """An external program failed."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int | None,
        stdout: str | None,
        stderr: str | None,
    ):
        """
        Initialize exec error.

        Args:
            command: The command line that was executed
            exit_code: Exit status of the process, or None if it never started
            stdout: Captured standard output
            stderr: Captured standard error
        """
        cmdline = " ".join(command)
        if exit_code is None:
            user_msg = f"process '{cmdline}' could not be started"
        else:
            user_msg = f"process '{cmdline}' exited with status {exit_code}"

        super().__init__(
            user_message=user_msg,
            technical_message=(
                f"{type(self).__name__}(command={cmdline}, exit_code={exit_code}, "
                f"stdout={stdout!r}, stderr={stderr!r})"
            ),
            recoverable=True,
        )
        self.command = tuple(command)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class PathError(SystemCommandError):
    """A program is not installed."""

    def __init__(self, program: str):
        super().__init__(
            user_message=f"could not find '{program}' in PATH",
            recoverable=True,
            recovery_hint=f"Install '{program}' with your distribution's package manager",
        )
        self.program = program
