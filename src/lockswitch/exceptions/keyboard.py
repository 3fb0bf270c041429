"""Keyboard-related exceptions.

This module defines exceptions raised while querying or changing keys:
- KeyboardError: Base class for keyboard errors
- AutoReloaderError: Listener registered on a stopped reloader
- KeyStateCouldNotBeChangedError: A key did not reach the requested state
- KeyStatusNotFoundError: The status query has no record for a key
- StatusParseError: The status query output is malformed
- UnknownKeyError: A key name has no definition
"""

from .base import LockSwitchError


class KeyboardError(LockSwitchError):
    """Keyboard state could not be read or changed."""
    pass


class AutoReloaderError(KeyboardError):
    """The auto reloading interval finished before its reloader."""

    def __init__(self):
        super().__init__(
            user_message="Interval for auto reloading keyboard status was finished unexpectedly",
            technical_message="add_listener() called on a KeyStatusReloader whose interval is finished",
        )


def _state_name(state: bool) -> str:
    return "on" if state else "off"


class KeyStateCouldNotBeChangedError(KeyboardError):
    """A key could not be driven to the requested state."""

    def __init__(self, key: str, target_state: bool, attempts: int | None = None):
        """
        Initialize key state error.

        Args:
            key: The key name (e.g. "Num Lock")
            target_state: The requested state
            attempts: How many attempts were made (if known)
        """
        user_msg = f"{key} could not be turned {_state_name(target_state)}"
        tech_msg = f"{type(self).__name__}(key={key!r}, target_state={target_state})"
        if attempts is not None:
            tech_msg += f" after {attempts} attempt(s)"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint=(
                "Check that xset works in this session (X11 only) and try again. "
                "For Scroll Lock, run 'lockswitch reset-keymap' first."
            ),
        )
        self.key = key
        self.target_state = target_state
        self.attempts = attempts


class KeyStatusNotFoundError(KeyboardError):
    """The keyboard status query did not report a key."""

    def __init__(self, key: str):
        super().__init__(
            user_message=f"No status reported for key '{key}'",
            recovery_hint="Run 'lockswitch status' to see the keys reported by xset",
        )
        self.key = key


class StatusParseError(KeyboardError):
    """Keyboard status output could not be parsed."""

    def __init__(self, text: str, reason: str):
        super().__init__(
            user_message="Keyboard status output is malformed",
            technical_message=f"Could not parse status {text!r}: {reason}",
        )
        self.text = text
        self.reason = reason


class UnknownKeyError(KeyboardError):
    """A key name has no definition."""

    def __init__(self, key: str, known: list[str]):
        super().__init__(
            user_message=f"Unknown key '{key}'",
            recoverable=True,
            recovery_hint=f"Valid keys: {', '.join(known)}",
        )
        self.key = key
        self.known = known
