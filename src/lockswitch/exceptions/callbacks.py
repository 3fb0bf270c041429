"""Callback wrapper exceptions.

These signal programming errors in code that uses the callback wrappers:
- CallbackError: Base class for callback wrapper errors
- ReturnValueError: A wrapped callback returned a reserved marker value
- OnceCallbackAlreadyCalled: A once-only callback was called again
"""

from .base import LockSwitchError


class CallbackError(LockSwitchError):
    """A callback wrapper was misused."""

    def __init__(self, callback_name: str, marker: object, description: str):
        """
        Initialize callback error.

        Args:
            callback_name: The ``__name__`` of the original callback
            marker: The sentinel used by the wrapper that raised
            description: What went wrong with the callback
        """
        super().__init__(
            user_message=f"Callback '{callback_name}' {description}",
            technical_message=f"{type(self).__name__}(callback_name={callback_name!r}, marker={marker!r})",
        )
        self.callback_name = callback_name
        self.marker = marker


class ReturnValueError(CallbackError):
    """A wrapped callback returned the marker reserved for its wrapper."""

    def __init__(self, callback_name: str, marker: object):
        super().__init__(callback_name, marker, f"returned reserved value {marker!r}")


class OnceCallbackAlreadyCalled(CallbackError):
    """A once-only callback was called a second time."""

    def __init__(self, callback_name: str):
        from lockswitch.callbacks.once import CALLED

        super().__init__(callback_name, CALLED, "was already called through a once wrapper")
