"""
Wrappers for the X11 utilities that read and change keyboard LEDs.

- `XSet`: query LED status and switch named LEDs
- `NumLockX`: switch Num Lock through ``numlockx``
- `XModMap`: make Scroll Lock switchable by binding it to a modifier

Executables are looked up in ``PATH`` on first use.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from lockswitch.protocols import CommandExecutor
from lockswitch.system import find_in_path

logger = logging.getLogger(__name__)


class Tool:
    """An external program run through a `CommandExecutor`."""

    name: str = ""

    def __init__(self, executor: CommandExecutor, program: Optional[str] = None):
        """
        Args:
            executor: Runs the program
            program: Full path to the program (default: looked up in PATH)
        """
        self._executor = executor
        self._program = program

    @property
    def program(self) -> str:
        """
        Full path to the program.

        Raises:
            PathError: If the program is not installed
        """
        if self._program is None:
            self._program = find_in_path(self.name)
            logger.debug(f"Using {self.name} at {self._program}")
        return self._program

    async def run(self, *args: str) -> str:
        """Run the program and return its stdout."""
        result = await self._executor.execute(self.program, *args)
        return result.stdout


class XSet(Tool):
    """
    The ``xset`` utility.

    See https://man.archlinux.org/man/extra/xorg-xset/xset.1.en
    """

    name = "xset"

    async def query(self) -> str:
        """Current keyboard settings, including the LED status lines."""
        return await self.run("q")

    async def led_on(self, name: str) -> None:
        """Turn on the LED of the key called `name`."""
        await self.run("led", "named", name)

    async def led_off(self, name: str) -> None:
        """Turn off the LED of the key called `name`."""
        await self.run("-led", "named", name)


class NumLockX(Tool):
    """The ``numlockx`` utility."""

    name = "numlockx"

    async def on(self) -> None:
        await self.run("on")

    async def off(self) -> None:
        await self.run("off")


class XModMap(Tool):
    """The ``xmodmap`` utility."""

    name = "xmodmap"

    async def prepare_scroll_lock(self) -> None:
        """Bind Scroll Lock to ``mod3`` so ``xset`` can switch its LED."""
        await self.run("-e", "add mod3 = Scroll_Lock")


@dataclass(frozen=True)
class KeyboardTools:
    """The set of utilities the key definitions rely on."""

    xset: XSet
    numlockx: NumLockX
    xmodmap: XModMap

    @classmethod
    def from_executor(cls, executor: CommandExecutor) -> "KeyboardTools":
        return cls(xset=XSet(executor), numlockx=NumLockX(executor), xmodmap=XModMap(executor))
