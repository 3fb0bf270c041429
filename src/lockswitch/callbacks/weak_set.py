"""A set-like collection of weak callbacks, used to fan out notifications."""

import logging
from collections.abc import Callable, Iterator
from typing import Any, Concatenate, Generic, ParamSpec, TypeVar

from .weak import WeakCallback, weak

logger = logging.getLogger(__name__)


P = ParamSpec("P")
R = TypeVar("R")


class WeakCallbackRef(WeakCallback[P, R]):
    """A `WeakCallback` that belongs to a `WeakCallbackSet` and can remove itself."""

    def __init__(
        self,
        owner: object,
        callback: Callable[Concatenate[Any, P], R],
        container: "WeakCallbackSet[P, R]",
    ):
        super().__init__(owner, callback)
        # the set only is reached weakly, so a stale ref never keeps it alive
        self._remove = weak(container, WeakCallbackSet.discard)

    def delete(self) -> bool:
        """
        Remove this callback from its set and release its references.

        Idempotent.

        Returns:
            True if the callback was in the set and has been removed by this call
        """
        removed = self._remove(self)
        self._remove.collect()
        self.collect()
        return removed is True


class WeakCallbackSet(Generic[P, R]):
    """
    A collection of `WeakCallbackRef`s, each with its own owner.

    Entries are kept in insertion order. Collected entries are removed lazily,
    after a `for_each` pass, never while iterating.

    Example:
        ```python
        listeners = WeakCallbackSet[[Status], None]()
        ref = listeners.add(switch, KeySwitch.on_status)
        listeners.call_each(status)
        ref.delete()
        ```
    """

    def __init__(self):
        self._items: dict[WeakCallbackRef[P, R], None] = {}

    def add(self, owner: object, callback: Callable[Concatenate[Any, P], R]) -> WeakCallbackRef[P, R]:
        """
        Wrap `callback` with a weak reference to `owner` and insert it.

        Returns:
            The new entry, which can remove itself with `delete()`
        """
        ref = WeakCallbackRef(owner, callback, self)
        self._items[ref] = None
        return ref

    def discard(self, ref: WeakCallbackRef[P, R]) -> bool:
        """
        Remove `ref` from this set without collecting it.

        Returns:
            True if `ref` was present
        """
        try:
            del self._items[ref]
        except KeyError:
            return False
        return True

    def for_each(self, visit: Callable[[WeakCallbackRef[P, R]], object]) -> None:
        """
        Call `visit` once for each entry, in insertion order.

        Entries found collected are removed after the pass. Entries removed by
        `visit` itself are skipped if not yet visited.
        """
        dead: list[WeakCallbackRef[P, R]] = []
        try:
            for ref in list(self._items):
                if ref not in self._items:
                    continue
                visit(ref)
                if ref.is_collected:
                    dead.append(ref)
        finally:
            for ref in dead:
                self.discard(ref)
            if dead:
                logger.debug(f"Removed {len(dead)} collected callback(s)")

    def call_each(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """Call every entry with the same arguments."""
        self.for_each(lambda ref: ref(*args, **kwargs))

    def clear(self) -> None:
        """Collect and remove every entry."""
        for ref in self._items:
            ref.collect()
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[WeakCallbackRef[P, R]]:
        return iter(list(self._items))

    def __contains__(self, ref: object) -> bool:
        return ref in self._items
