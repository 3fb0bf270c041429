"""Periodic keyboard status polling with weakly held listeners."""

import logging
from collections.abc import Callable
from typing import Any, Optional

from lockswitch.callbacks import WeakCallbackRef, WeakCallbackSet
from lockswitch.core import Interval
from lockswitch.exceptions import AutoReloaderError, CallbackError

from .keys import Key
from .status import Status, parse_status
from .tools import XSet

logger = logging.getLogger(__name__)

DEFAULT_RELOAD_INTERVAL = 10.0

KeyStatusCallback = Callable[[Any, Status], Any]
"""Listener signature: ``callback(owner, status)``."""


class KeyStatusReloader:
    """
    Queries the keyboard status regularly and sends it to per-key listeners.

    Listeners are held through weak references to their owners, so a widget
    that goes away without unregistering simply stops receiving updates. The
    reloader's own interval is bound weakly to the reloader too.

    Example:
        ```python
        reloader = KeyStatusReloader(XSet(SubprocessExecutor()), period=5.0)
        ref = reloader.add_listener("Num Lock", switch, KeySwitch.on_status)
        await reloader.reload()
        ref.delete()
        reloader.destroy()
        ```

    Threading:
        Must be created inside a running asyncio loop; all methods run on it.
    """

    def __init__(self, xset: XSet, period: float = DEFAULT_RELOAD_INTERVAL):
        """
        Initialize the reloader and start its interval.

        Args:
            xset: Used to query the keyboard status
            period: Seconds between automatic reloads
        """
        self._xset = xset
        self._listeners: dict[str, WeakCallbackSet[[Status], Any]] = {}
        self._interval = Interval.start(self, KeyStatusReloader.reload, period)
        logger.info(f"KeyStatusReloader started (every {period}s)")

    @property
    def finished(self) -> bool:
        """True once the automatic reload interval stopped."""
        return self._interval.finished

    def _assert_auto_reloading(self) -> None:
        if self._interval.finished:
            raise AutoReloaderError()

    async def query(self) -> list[Status]:
        """
        Query and parse the current status of every key, without notifying anyone.

        Raises:
            ExecError: If ``xset`` fails
            PathError: If ``xset`` is not installed
            StatusParseError: If the output is malformed
        """
        return parse_status(await self._xset.query())

    async def reload(self) -> Optional[list[Status]]:
        """
        Query the status and send each record to the listeners of its key.

        Query errors are logged and the cycle is skipped. Listener errors are
        logged per listener, except misuse of a callback wrapper
        (`CallbackError`), which propagates.

        Returns:
            The parsed statuses, or None if the query failed or the reloader
            was destroyed
        """
        if self._interval.finished:
            logger.debug("Reload skipped: reloader is finished")
            return None

        try:
            statuses = await self.query()
        except Exception as e:
            logger.error(f"Failed to reload keyboard status: {e}", exc_info=True)
            return None

        for status in statuses:
            listeners = self._listeners.get(status.name)
            if listeners is not None:
                listeners.for_each(lambda ref: self._deliver(ref, status))

        logger.debug(f"Reloaded {len(statuses)} key status(es)")
        return statuses

    @staticmethod
    def _deliver(ref: WeakCallbackRef[[Status], Any], status: Status) -> None:
        try:
            ref(status)
        except CallbackError:
            raise
        except Exception as e:
            logger.error(f"Error notifying listener {ref.name} of {status.name}: {e}", exc_info=True)

    def add_listener(self, key: Key | str, owner: object, callback: KeyStatusCallback) -> WeakCallbackRef:
        """
        Register ``callback(owner, status)`` for updates on `key`.

        Args:
            key: The key, or its name
            owner: Passed to `callback`; held through a weak reference
            callback: Called with every new status of `key`

        Returns:
            A reference whose `delete()` unregisters the listener

        Raises:
            AutoReloaderError: If the reload interval already finished
        """
        self._assert_auto_reloading()

        name = key if isinstance(key, str) else key.name
        listeners = self._listeners.get(name)
        if listeners is None:
            listeners = self._listeners[name] = WeakCallbackSet()
        return listeners.add(owner, callback)

    def listener_count(self, key: Key | str) -> int:
        """Number of listeners registered for `key`."""
        name = key if isinstance(key, str) else key.name
        listeners = self._listeners.get(name)
        return len(listeners) if listeners is not None else 0

    def destroy(self) -> None:
        """Remove every listener and stop the automatic reloads. Idempotent."""
        for listeners in self._listeners.values():
            listeners.clear()
        self._listeners.clear()

        if self._interval.cancel():
            logger.info("KeyStatusReloader stopped")
