"""A headless toggle kept in sync with one key."""

import logging
from collections.abc import Callable
from typing import Any, Optional

from lockswitch.callbacks import WeakCallbackRef, WeakCallbackSet
from lockswitch.exceptions import CallbackError, KeyStateCouldNotBeChangedError, LockSwitchError
from lockswitch.keyboard import KeyStateController, KeyStatusReloader, Status
from lockswitch.protocols import SwitchEvent

logger = logging.getLogger(__name__)

SwitchCallback = Callable[[Any, SwitchEvent, "KeySwitch"], Any]
"""Listener signature: ``callback(owner, event, switch)``."""


class KeySwitch:
    """
    The state a toggle widget should show for one key.

    The switch listens to the reloader for changes made outside the
    application (physical key presses, other programs) and drives the key
    through its controller when toggled.

    Events:
        STATE_CHANGED: the known state changed, from a toggle or a reload
        CHANGE_FAILED: a toggle could not reach the requested state
    """

    def __init__(self, controller: KeyStateController, reloader: KeyStatusReloader):
        self._controller = controller
        self._reloader = reloader
        self._state: Optional[bool] = None
        self._listeners: WeakCallbackSet[[SwitchEvent, KeySwitch], Any] = WeakCallbackSet()
        self._status_ref = reloader.add_listener(controller.key, self, KeySwitch._on_status)

    @property
    def name(self) -> str:
        return self._controller.key.name

    @property
    def state(self) -> Optional[bool]:
        """Last known state, or None before the first status arrives."""
        return self._state

    def add_listener(self, owner: object, callback: SwitchCallback) -> WeakCallbackRef:
        """
        Register ``callback(owner, event, switch)``, holding `owner` weakly.

        Returns:
            A reference whose `delete()` unregisters the listener
        """
        return self._listeners.add(owner, callback)

    def _notify(self, event: SwitchEvent) -> None:
        def deliver(ref: WeakCallbackRef) -> None:
            try:
                ref(event, self)
            except CallbackError:
                raise
            except Exception as e:
                logger.error(f"Error notifying switch listener {ref.name} of {event.value}: {e}", exc_info=True)

        self._listeners.for_each(deliver)

    def _update(self, state: bool) -> None:
        if state != self._state:
            logger.debug(f"{self.name} switch: {self._state} -> {state}")
            self._state = state
            self._notify(SwitchEvent.STATE_CHANGED)

    def _on_status(self, status: Status) -> None:
        self._update(status.is_on)

    async def refresh(self) -> bool:
        """Query the key directly and update the switch."""
        state = await self._controller.get()
        self._update(state)
        return state

    async def toggle(self, state: Optional[bool] = None) -> bool:
        """
        Switch the key on or off.

        Args:
            state: Target state (default: the opposite of the current state)

        Returns:
            The key state after switching

        Raises:
            KeyStateCouldNotBeChangedError: If the key did not reach the state
        """
        if state is None:
            current = self._state if self._state is not None else await self.refresh()
            state = not current

        try:
            result = await self._controller.set(state)
        except KeyStateCouldNotBeChangedError:
            self._notify(SwitchEvent.CHANGE_FAILED)
            try:
                await self.refresh()
            except CallbackError:
                raise
            except LockSwitchError as e:
                logger.warning(f"Could not refresh {self.name} after failed switch: {e}")
            raise

        self._update(result)
        return result

    def destroy(self) -> None:
        """Stop listening to the reloader and cancel any running switch."""
        self._status_ref.delete()
        self._controller.remove()
        self._listeners.clear()
