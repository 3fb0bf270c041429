"""Interface for running external programs."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a successful program run."""

    stdout: str
    stderr: str


@runtime_checkable
class CommandExecutor(Protocol):
    """
    Runs an external program and captures its output.

    Keyboard tools only depend on this protocol, never on how processes are
    spawned, so tests can substitute an in-memory device.
    """

    async def execute(self, command: str, *args: str) -> CommandResult:
        """
        Run `command` with `args`.

        Returns:
            The captured stdout and stderr

        Raises:
            ExecError: If the program exits non-zero or cannot be spawned
        """
        ...
