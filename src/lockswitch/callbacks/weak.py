"""Callbacks that hold their owner through a weak reference.

A `WeakCallback` pairs a plain function with an owner object. Calling the
wrapper calls ``function(owner, *args)`` while the owner is alive. Once the
owner is garbage collected (or `collect()` is called) both references are
dropped and every call returns `COLLECTED` instead.

This lets long lived emitters, such as a polling interval, hold listeners
without keeping those listeners alive.
"""

import inspect
import logging
import weakref
from collections.abc import Callable
from typing import Any, Concatenate, Generic, ParamSpec, TypeVar

from lockswitch.exceptions import ReturnValueError

from .markers import Marker, callback_name

logger = logging.getLogger(__name__)

COLLECTED = Marker("collected")
"""Returned by a `WeakCallback` whose owner is gone. Must never be returned by the wrapped function."""


P = ParamSpec("P")
R = TypeVar("R")


class WeakCallback(Generic[P, R]):
    """
    A callback bound weakly to its owner.

    Attributes:
        name: Name of the wrapped function, kept after collection

    Note:
        Bound methods of the owner are unbound on construction, so
        ``weak(self, self.reload)`` does not keep ``self`` alive.
    """

    def __init__(self, owner: object, callback: Callable[Concatenate[Any, P], R]):
        if inspect.ismethod(callback) and callback.__self__ is owner:
            callback = callback.__func__

        self._ref: weakref.ref | None = weakref.ref(owner)
        self._callback: Callable[Concatenate[Any, P], R] | None = callback
        self.name = callback_name(callback)

    def _release(self) -> None:
        self._ref = None
        self._callback = None

    def _deref(self) -> tuple[object, Callable[Concatenate[Any, P], R]] | None:
        """Strong references to the owner and function, or None after collection.

        Drops both references as soon as the owner is found dead.
        """
        if self._ref is None or self._callback is None:
            return None

        owner = self._ref()
        if owner is None:
            logger.debug(f"Owner of {self.name} was garbage collected")
            self._release()
            return None
        return owner, self._callback

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R | Marker:
        """
        Call the wrapped function with the owner as first argument.

        Returns:
            The function result, or `COLLECTED` if the owner is gone

        Raises:
            ReturnValueError: If the wrapped function returns `COLLECTED`
        """
        data = self._deref()
        if data is None:
            return COLLECTED

        owner, callback = data
        result = callback(owner, *args, **kwargs)
        if result is COLLECTED:
            raise ReturnValueError(self.name, COLLECTED)
        return result

    @property
    def is_collected(self) -> bool:
        """True if the owner is no longer reachable or `collect()` was called."""
        return self._deref() is None

    def collect(self) -> bool:
        """
        Release the references to the owner and the function.

        Returns:
            True if this call released them, False if they were already released
        """
        present = self._deref() is not None
        self._release()
        return present

    def __repr__(self) -> str:
        state = "collected" if self.is_collected else "alive"
        return f"{type(self).__name__}({self.name!r}, {state})"


def weak(owner: object, callback: Callable[Concatenate[Any, P], R]) -> WeakCallback[P, R]:
    """
    Create a `WeakCallback` that passes `owner` as the first argument of `callback`.

    Args:
        owner: Data stored through a weak reference. Must support weak references.
        callback: Function called as ``callback(owner, *args)``.

    Returns:
        A callable that does not keep `owner` alive.

    Raises:
        TypeError: If `owner` cannot be weakly referenced
    """
    return WeakCallback(owner, callback)
