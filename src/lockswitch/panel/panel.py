"""
The key panel: every switch, the reloader and their shared lifecycle.

This plays the role of a tray menu without any widget code. A UI creates a
`KeyPanel`, binds widgets to `panel.switches`, forwards menu open/close to
`panel.open_state_callback`, and calls `destroy()` on teardown.
"""

import asyncio
import logging
from typing import Optional

from lockswitch.callbacks import weak
from lockswitch.exceptions import UnknownKeyError
from lockswitch.keyboard import (
    KeyboardTools,
    KeyStateController,
    KeyStatusReloader,
    Status,
    build_keys,
)
from lockswitch.models import AppConfig
from lockswitch.protocols import CommandExecutor
from lockswitch.system import SubprocessExecutor

from .switch import KeySwitch

logger = logging.getLogger(__name__)


class KeyPanel:
    """
    Owns the reloader, one controller and one switch per configured key.

    Architecture:
        KeyPanel (this class)
        ├── KeyboardTools: xset, numlockx, xmodmap
        ├── KeyStatusReloader: polls xset every `reload_interval`
        └── KeySwitch per key
            └── KeyStateController

    Usage:
        ```python
        async with KeyPanel(AppConfig.load_or_default()) as panel:
            await panel.switch("Num Lock").toggle(True)
        ```

    Threading:
        Must be created inside a running asyncio loop.
    """

    def __init__(self, config: AppConfig, executor: Optional[CommandExecutor] = None):
        """
        Build the panel and start the reloader.

        Args:
            config: Application configuration
            executor: Runs the keyboard tools (default: real subprocesses)
        """
        self._config = config
        self._tools = KeyboardTools.from_executor(executor or SubprocessExecutor())
        self._reloader = KeyStatusReloader(self._tools.xset, config.reload_interval)

        keys = build_keys(
            self._tools,
            config.keys,
            use_numlockx=config.use_numlockx,
            prepare_scroll_lock=config.prepare_scroll_lock,
        )
        self._switches: dict[str, KeySwitch] = {
            name: KeySwitch(KeyStateController(key, self._reloader.query, config.max_attempts), self._reloader)
            for name, key in keys.items()
        }

        # handed to a UI's "menu opened" signal; collected on destroy
        self.open_state_callback = weak(self, KeyPanel._reload_on_open)
        self._pending: set[asyncio.Future] = set()
        self._destroyed = False

        logger.info(f"KeyPanel created with keys: {', '.join(self._switches)}")

    @property
    def reloader(self) -> KeyStatusReloader:
        return self._reloader

    @property
    def switches(self) -> list[KeySwitch]:
        return list(self._switches.values())

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def switch(self, name: str) -> KeySwitch:
        """
        Get the switch for key `name`.

        Raises:
            UnknownKeyError: If the key is not in this panel
        """
        try:
            return self._switches[name]
        except KeyError:
            raise UnknownKeyError(name, list(self._switches)) from None

    async def reload(self) -> Optional[list[Status]]:
        """Reload every key status now."""
        return await self._reloader.reload()

    def _reload_on_open(self, is_open: bool) -> None:
        if is_open and not self._destroyed:
            task = asyncio.ensure_future(self.reload())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def reset_keymap(self) -> None:
        """Bind Scroll Lock to its modifier again, e.g. after a keymap change."""
        await self._tools.xmodmap.prepare_scroll_lock()
        logger.info("Scroll Lock keymap reset")

    def destroy(self) -> None:
        """Tear down every switch and stop the reloader. Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True

        self.open_state_callback.collect()
        for switch in self._switches.values():
            switch.destroy()
        self._reloader.destroy()
        logger.info("KeyPanel destroyed")

    async def __aenter__(self) -> "KeyPanel":
        await self.reload()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.destroy()
