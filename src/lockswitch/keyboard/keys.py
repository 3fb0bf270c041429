"""Definitions of the keys that can be switched."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from lockswitch.callbacks import once
from lockswitch.exceptions import UnknownKeyError

from .tools import KeyboardTools

logger = logging.getLogger(__name__)

NUM_LOCK = "Num Lock"
SCROLL_LOCK = "Scroll Lock"
KEY_NAMES = (NUM_LOCK, SCROLL_LOCK)


@dataclass(frozen=True)
class Key:
    """A keyboard key that can be turned on and off."""

    name: str  # as reported by xset
    turn_on: Callable[[], Awaitable[None]]
    turn_off: Callable[[], Awaitable[None]]


def num_lock_key(tools: KeyboardTools, use_numlockx: bool = True) -> Key:
    """
    The Num Lock key.

    ``xset`` only changes the LED on some setups, so ``numlockx`` is run
    alongside it when enabled.
    """

    async def turn_on() -> None:
        actions = [tools.xset.led_on(NUM_LOCK)]
        if use_numlockx:
            actions.append(tools.numlockx.on())
        await asyncio.gather(*actions)

    async def turn_off() -> None:
        actions = [tools.xset.led_off(NUM_LOCK)]
        if use_numlockx:
            actions.append(tools.numlockx.off())
        await asyncio.gather(*actions)

    return Key(name=NUM_LOCK, turn_on=turn_on, turn_off=turn_off)


def scroll_lock_key(tools: KeyboardTools, prepare_keymap: bool = True) -> Key:
    """
    The Scroll Lock key.

    Scroll Lock has no modifier on most keymaps; the keymap is prepared once,
    before the first switch. Use `KeyPanel.reset_keymap` to run it again.
    """
    prepare = once(tools.xmodmap.prepare_scroll_lock)

    async def prepare_once() -> None:
        if prepare_keymap and not prepare.called:
            logger.info("Preparing keymap for Scroll Lock")
            await prepare()

    async def turn_on() -> None:
        await prepare_once()
        await tools.xset.led_on(SCROLL_LOCK)

    async def turn_off() -> None:
        await prepare_once()
        await tools.xset.led_off(SCROLL_LOCK)

    return Key(name=SCROLL_LOCK, turn_on=turn_on, turn_off=turn_off)


def build_keys(
    tools: KeyboardTools,
    names: Iterable[str] = KEY_NAMES,
    *,
    use_numlockx: bool = True,
    prepare_scroll_lock: bool = True,
) -> dict[str, Key]:
    """
    Create the keys listed in `names`, keeping their order.

    Raises:
        UnknownKeyError: If a name is not one of `KEY_NAMES`
    """
    factories = {
        NUM_LOCK: lambda: num_lock_key(tools, use_numlockx),
        SCROLL_LOCK: lambda: scroll_lock_key(tools, prepare_scroll_lock),
    }

    keys: dict[str, Key] = {}
    for name in names:
        factory = factories.get(name)
        if factory is None:
            raise UnknownKeyError(name, list(KEY_NAMES))
        keys[name] = factory()
    return keys
