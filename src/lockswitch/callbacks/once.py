"""Callbacks that run at most one time."""

from collections.abc import Callable
from typing import Generic, ParamSpec, TypeVar

from lockswitch.exceptions import OnceCallbackAlreadyCalled, ReturnValueError

from .markers import Marker, callback_name

CALLED = Marker("called")
"""Marks a `OnceCallback` that was already called. Never returned by `OnceCallback` itself."""


P = ParamSpec("P")
R = TypeVar("R")


class OnceCallback(Generic[P, R]):
    """
    A callable wrapper that can be called a single time.

    The first call runs the wrapped function and drops the reference to it,
    keeping only its name for error messages. Every later call raises
    `OnceCallbackAlreadyCalled`, even when the first call raised.

    Example:
        ```python
        prepare = once(xmodmap.prepare_scroll_lock)
        await prepare()
        prepare.called  # True
        await prepare()  # raises OnceCallbackAlreadyCalled
        ```
    """

    def __init__(self, callback: Callable[P, R]):
        self._callback: Callable[P, R] | None = callback
        self._name = callback_name(callback)

    @property
    def name(self) -> str:
        """Name of the wrapped function."""
        return self._name

    @property
    def called(self) -> bool:
        """True once the wrapper has been called."""
        return self._callback is None

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """
        Call the wrapped function and release it.

        Raises:
            OnceCallbackAlreadyCalled: If called a second time
            ReturnValueError: If the wrapped function returns `CALLED`
        """
        callback = self._callback
        if callback is None:
            raise OnceCallbackAlreadyCalled(self._name)
        self._callback = None

        result = callback(*args, **kwargs)
        if result is CALLED:
            raise ReturnValueError(self._name, CALLED)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, called={self.called})"


def once(callback: Callable[P, R]) -> OnceCallback[P, R]:
    """
    Wrap `callback` so it can only be called once.

    Args:
        callback: The function to be wrapped. Released after the first call.

    Returns:
        An equivalent callable that raises on its second call.
    """
    return OnceCallback(callback)
