"""Repeating timers bound weakly to their owner.

An `Interval` calls a function every `period` seconds on the running asyncio
loop until either:

- the owner passed to `Interval.start` is garbage collected, or
- `Interval.cancel()` is called.

Because the owner is only weakly referenced, a background poll can never
outlive the object it serves, even if nobody remembers to cancel it.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any, Optional

from lockswitch.callbacks import COLLECTED, WeakCallback, weak

logger = logging.getLogger(__name__)


class Interval:
    """
    A repeating timer driven by `loop.call_later`.

    Use `Interval.start` to create one. The first call happens after one full
    period, never immediately.

    If the function returns an awaitable (for example an ``async def`` method),
    it is scheduled as a task and tracked until it finishes. Ticks do not wait
    for the previous task.

    Threading:
        Must be started and cancelled from the loop's own thread.
    """

    def __init__(self, callback: WeakCallback[[], Any], period: float, loop: asyncio.AbstractEventLoop):
        """
        Initialize an unscheduled interval. Prefer `Interval.start`.

        Args:
            callback: Weak callback invoked on every tick
            period: Seconds between ticks
            loop: Event loop used for scheduling
        """
        self._callback = callback
        self._period = period
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Future] = set()

    @classmethod
    def start(
        cls,
        owner: object,
        callback: Callable[[Any], Any],
        period: float,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "Interval":
        """
        Call ``callback(owner)`` every `period` seconds.

        Args:
            owner: Passed to `callback`; held through a weak reference
            callback: Function to call on every tick
            period: Seconds between ticks (must be positive)
            loop: Event loop to use (default: the running loop)

        Returns:
            The started interval

        Raises:
            ValueError: If `period` is not positive
            RuntimeError: If no loop is given and none is running
        """
        if period <= 0:
            raise ValueError(f"Interval period must be positive, got {period}")

        interval = cls(weak(owner, callback), period, loop or asyncio.get_running_loop())
        interval._schedule()
        logger.debug(f"Started interval for {interval._callback.name} every {period}s")
        return interval

    @property
    def period(self) -> float:
        """Seconds between ticks."""
        return self._period

    @property
    def finished(self) -> bool:
        """True once the interval stopped, by cancellation or by owner collection."""
        return self._callback.is_collected

    @property
    def pending_tasks(self) -> int:
        """Number of tasks started by ticks that are still running."""
        return len(self._tasks)

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self._period, self._tick)

    def _tick(self) -> None:
        self._handle = None

        try:
            result = self._callback()
        except Exception:
            logger.exception(f"Error in interval callback {self._callback.name}")
            result = None

        if result is COLLECTED and self._callback.is_collected:
            logger.debug(f"Interval for {self._callback.name} stopped: owner was collected")
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result, loop=self._loop)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

        # the callback may have cancelled this interval itself
        if not self.finished:
            self._schedule()

    def _on_task_done(self, task: asyncio.Future) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                f"Error in interval task {self._callback.name}: {task.exception()}",
                exc_info=task.exception(),
            )

    def cancel(self) -> bool:
        """
        Stop the interval. Running tasks are left to finish.

        Returns:
            True if this call stopped the interval, False if it was already finished
        """
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        stopped = self._callback.collect()
        if stopped:
            logger.debug(f"Cancelled interval for {self._callback.name}")
        return stopped

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._callback.name!r}, period={self._period}, finished={self.finished})"
