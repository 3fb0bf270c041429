"""Driving a key toward a requested state.

Switching a key is fire-and-forget: the only way to know if it worked is to
query the status again. `KeyStateController.set` retries the key action and
re-queries until the state matches, up to a fixed number of attempts.

Only the latest `set` for a key is allowed to keep retrying. Starting a new
one cancels the previous drive, which stops at its next attempt boundary and
returns without error.
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Optional

from lockswitch.exceptions import (
    CallbackError,
    KeyStateCouldNotBeChangedError,
    KeyStatusNotFoundError,
    LockSwitchError,
)

from .keys import Key
from .status import Status, find_status

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10

StatusQuery = Callable[[], Awaitable[list[Status]]]


class DriveOutcome(Enum):
    """How a drive operation ended."""

    CONVERGED = "converged"  # Key reached the target state
    CANCELLED = "cancelled"  # Superseded by a newer drive
    EXHAUSTED = "exhausted"  # Ran out of attempts


class DriveOperation:
    """
    A cancellable retry loop pushing one key to a target state.

    Cancellation is cooperative: it is checked before every attempt, and an
    action that already started always runs to completion.
    """

    def __init__(
        self,
        key: Key,
        target: bool,
        is_on: Callable[[], Awaitable[bool]],
        max_attempts: int = MAX_ATTEMPTS,
    ):
        self.key = key
        self.target = target
        self._is_on = is_on
        self._max_attempts = max_attempts
        self._cancelled = False
        self.attempts = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Mark this drive as superseded."""
        if not self._cancelled:
            logger.debug(f"Cancelling drive of {self.key.name} to {self.target}")
        self._cancelled = True

    async def _attempt(self) -> bool:
        action = self.key.turn_on if self.target else self.key.turn_off
        try:
            await action()
            return await self._is_on() == self.target
        except CallbackError:
            raise
        except LockSwitchError as e:
            logger.warning(f"Attempt {self.attempts} to switch {self.key.name} failed: {e.technical_message}")
            return False

    async def run(self) -> DriveOutcome:
        """
        Run attempts until converged, cancelled or exhausted.

        A drive cancelled while an attempt was running reports CANCELLED,
        whatever that attempt achieved.
        """
        converged = False
        while not converged and self.attempts < self._max_attempts:
            if self._cancelled:
                break

            self.attempts += 1
            converged = await self._attempt()

        if self._cancelled:
            return DriveOutcome.CANCELLED
        return DriveOutcome.CONVERGED if converged else DriveOutcome.EXHAUSTED


class KeyStateController:
    """
    High level control of one key's state.

    Example:
        ```python
        controller = KeyStateController(NUM_LOCK_KEY, reloader.query)
        await controller.set(True)   # True, or raises KeyStateCouldNotBeChangedError
        await controller.get()       # fresh query
        ```
    """

    def __init__(self, key: Key, query: StatusQuery, max_attempts: int = MAX_ATTEMPTS):
        """
        Args:
            key: The key to control
            query: Returns the current status of all keys (never cached)
            max_attempts: Attempts per drive before giving up
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self._key = key
        self._query = query
        self._max_attempts = max_attempts
        self._drive: Optional[DriveOperation] = None

    @property
    def key(self) -> Key:
        return self._key

    @property
    def driving(self) -> bool:
        """True while a `set` call owns this key."""
        return self._drive is not None

    async def get(self) -> bool:
        """
        Query whether the key is currently on.

        Raises:
            KeyStatusNotFoundError: If the query does not report this key
        """
        status = find_status(await self._query(), self._key.name)
        if status is None:
            raise KeyStatusNotFoundError(self._key.name)
        return status.is_on

    def _replace_drive(self, drive: Optional[DriveOperation]) -> None:
        if self._drive is not None:
            self._drive.cancel()
        self._drive = drive

    async def set(self, target: bool) -> bool:
        """
        Drive the key to `target`.

        Any previous `set` on this key is cancelled first. If the key is
        already at `target`, no action runs.

        Returns:
            The state after the operation. Equal to `target` unless this call
            was superseded by a newer one.

        Raises:
            KeyStateCouldNotBeChangedError: If all attempts ran out without
                reaching `target`
        """
        drive = DriveOperation(self._key, target, self.get, self._max_attempts)
        # installed before the first query, so a newer set() always supersedes this one
        self._replace_drive(drive)

        try:
            if await self.get() == target:
                return target

            logger.info(f"Switching {self._key.name} {'on' if target else 'off'}")
            await drive.run()
        finally:
            if self._drive is drive:
                self._drive = None

        final_state = await self.get()
        if drive.cancelled:
            logger.debug(f"Switching {self._key.name} was superseded, state is {final_state}")
            return final_state

        if final_state != target:
            raise KeyStateCouldNotBeChangedError(self._key.name, target, attempts=drive.attempts)

        logger.info(f"{self._key.name} is {'on' if target else 'off'} after {drive.attempts} attempt(s)")
        return final_state

    def remove(self) -> None:
        """Cancel the in-flight `set`, if any, without starting another."""
        self._replace_drive(None)
