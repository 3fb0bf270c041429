"""Protocol definitions shared across lockswitch.

- Events: switch state notifications
- Executor: the contract for running external programs
"""

from .events import SwitchEvent
from .executor import CommandExecutor, CommandResult

__all__ = ["CommandExecutor", "CommandResult", "SwitchEvent"]
