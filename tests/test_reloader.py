"""Tests for KeyStatusReloader."""

import asyncio
import gc

import pytest
import pytest_asyncio

from lockswitch.callbacks import once
from lockswitch.exceptions import AutoReloaderError, ExecError, OnceCallbackAlreadyCalled
from lockswitch.keyboard import KeyStatusReloader, XSet


class Listener:
    """Collects the statuses it is sent."""

    def __init__(self):
        self.received = []

    def on_status(self, status):
        self.received.append(status)

    def fail(self, status):
        raise RuntimeError("listener broke")


@pytest_asyncio.fixture
async def reloader(keyboard):
    """A reloader on the fake keyboard with a long period."""
    reloader = KeyStatusReloader(XSet(keyboard), period=60.0)
    yield reloader
    reloader.destroy()


@pytest.mark.unit
class TestKeyStatusReloader:
    """Test KeyStatusReloader."""

    @pytest.mark.asyncio
    async def test_query_does_not_notify(self, reloader, keyboard):
        listener = Listener()
        reloader.add_listener("Num Lock", listener, Listener.on_status)
        keyboard.set_state("Num Lock", True)

        statuses = await reloader.query()

        assert [s.name for s in statuses] == ["Caps Lock", "Num Lock", "Scroll Lock"]
        assert listener.received == []

    @pytest.mark.asyncio
    async def test_reload_fans_out_per_key(self, reloader, keyboard):
        first, second, scroll, absent = Listener(), Listener(), Listener(), Listener()
        reloader.add_listener("Num Lock", first, Listener.on_status)
        reloader.add_listener("Num Lock", second, Listener.on_status)
        reloader.add_listener("Scroll Lock", scroll, Listener.on_status)
        reloader.add_listener("Kana", absent, Listener.on_status)
        keyboard.set_state("Num Lock", True)

        statuses = await reloader.reload()

        assert len(statuses) == 3
        assert [s.is_on for s in first.received] == [True]
        assert [s.is_on for s in second.received] == [True]
        assert [(s.name, s.is_on) for s in scroll.received] == [("Scroll Lock", False)]
        assert absent.received == []

    @pytest.mark.asyncio
    async def test_reload_failure_returns_none(self, reloader, keyboard):
        listener = Listener()
        reloader.add_listener("Num Lock", listener, Listener.on_status)
        keyboard.failing = True

        assert await reloader.reload() is None
        assert listener.received == []

    @pytest.mark.asyncio
    async def test_query_failure_propagates(self, reloader, keyboard):
        keyboard.failing = True

        with pytest.raises(ExecError):
            await reloader.query()

    @pytest.mark.asyncio
    async def test_listener_error_does_not_stop_others(self, reloader):
        broken, listener = Listener(), Listener()
        reloader.add_listener("Num Lock", broken, Listener.fail)
        reloader.add_listener("Num Lock", listener, Listener.on_status)

        statuses = await reloader.reload()

        assert statuses is not None
        assert len(listener.received) == 1

    @pytest.mark.asyncio
    async def test_delete_unregisters(self, reloader):
        listener = Listener()
        ref = reloader.add_listener("Num Lock", listener, Listener.on_status)
        assert reloader.listener_count("Num Lock") == 1

        assert ref.delete() is True
        await reloader.reload()

        assert listener.received == []
        assert reloader.listener_count("Num Lock") == 0

    @pytest.mark.asyncio
    async def test_collected_listener_is_dropped(self, reloader):
        listener = Listener()
        reloader.add_listener("Num Lock", listener, Listener.on_status)
        del listener
        gc.collect()

        await reloader.reload()

        assert reloader.listener_count("Num Lock") == 0

    @pytest.mark.asyncio
    async def test_destroy(self, reloader):
        listener = Listener()
        reloader.add_listener("Num Lock", listener, Listener.on_status)

        reloader.destroy()
        reloader.destroy()

        assert reloader.finished
        assert reloader.listener_count("Num Lock") == 0
        assert await reloader.reload() is None
        with pytest.raises(AutoReloaderError):
            reloader.add_listener("Num Lock", listener, Listener.on_status)

    @pytest.mark.asyncio
    async def test_reloads_periodically(self, keyboard):
        listener = Listener()
        reloader = KeyStatusReloader(XSet(keyboard), period=0.01)
        reloader.add_listener("Scroll Lock", listener, Listener.on_status)

        await asyncio.sleep(0.1)
        reloader.destroy()

        assert len(listener.received) >= 2
        assert keyboard.commands("xset").count(("q",)) >= 2

    @pytest.mark.asyncio
    async def test_stops_when_collected(self, keyboard):
        reloader = KeyStatusReloader(XSet(keyboard), period=0.01)
        del reloader
        gc.collect()
        calls = len(keyboard.calls)

        await asyncio.sleep(0.05)

        assert len(keyboard.calls) == calls

    @pytest.mark.asyncio
    async def test_callback_misuse_in_listener_propagates(self, reloader):
        prepare = once(lambda: None)
        prepare()

        class Misusing:
            def on_status(self, status):
                prepare()

        listener = Misusing()
        reloader.add_listener("Num Lock", listener, Misusing.on_status)

        with pytest.raises(OnceCallbackAlreadyCalled):
            await reloader.reload()
