"""Tests for KeyPanel and KeySwitch against a fake keyboard."""

import asyncio
import gc

import pytest
import pytest_asyncio

from lockswitch.callbacks import once
from lockswitch.exceptions import KeyStateCouldNotBeChangedError, OnceCallbackAlreadyCalled, UnknownKeyError
from lockswitch.models import AppConfig
from lockswitch.panel import KeyPanel
from lockswitch.protocols import SwitchEvent


class EventRecorder:
    """Records switch events as (event, key name, state)."""

    def __init__(self):
        self.events = []

    def on_event(self, event, switch):
        self.events.append((event, switch.name, switch.state))


@pytest_asyncio.fixture
async def panel(keyboard):
    """A panel over the fake keyboard, with few attempts per switch."""
    panel = KeyPanel(AppConfig(reload_interval=60.0, max_attempts=3), executor=keyboard)
    yield panel
    panel.destroy()


@pytest.mark.unit
class TestKeyPanel:
    """Test KeyPanel."""

    @pytest.mark.asyncio
    async def test_switches_follow_config_order(self, keyboard):
        panel = KeyPanel(AppConfig(keys=["Scroll Lock", "Num Lock"]), executor=keyboard)

        assert [switch.name for switch in panel.switches] == ["Scroll Lock", "Num Lock"]
        panel.destroy()

    @pytest.mark.asyncio
    async def test_unknown_switch(self, panel):
        with pytest.raises(UnknownKeyError):
            panel.switch("Caps Lock")

    @pytest.mark.asyncio
    async def test_states_unknown_until_reload(self, panel, keyboard):
        keyboard.set_state("Num Lock", True)
        assert panel.switch("Num Lock").state is None

        await panel.reload()

        assert panel.switch("Num Lock").state is True
        assert panel.switch("Scroll Lock").state is False

    @pytest.mark.asyncio
    async def test_context_manager_reloads_and_destroys(self, keyboard):
        async with KeyPanel(AppConfig(), executor=keyboard) as panel:
            assert panel.switch("Scroll Lock").state is False

        assert panel.destroyed
        assert panel.reloader.finished

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self, panel):
        panel.destroy()
        panel.destroy()

        assert panel.destroyed
        assert panel.reloader.finished
        assert panel.reloader.listener_count("Num Lock") == 0

    @pytest.mark.asyncio
    async def test_open_state_callback_reloads(self, panel, keyboard):
        panel.open_state_callback(False)
        await asyncio.sleep(0.01)
        assert panel.switch("Num Lock").state is None

        panel.open_state_callback(True)
        await asyncio.sleep(0.01)

        assert panel.switch("Num Lock").state is False
        assert keyboard.commands("xset") == [("q",)]

    @pytest.mark.asyncio
    async def test_open_state_callback_after_destroy(self, panel, keyboard):
        panel.destroy()

        panel.open_state_callback(True)
        await asyncio.sleep(0.01)

        assert panel.open_state_callback.is_collected
        assert keyboard.calls == []

    @pytest.mark.asyncio
    async def test_reset_keymap(self, panel, keyboard):
        await panel.reset_keymap()
        await panel.reset_keymap()

        assert keyboard.commands("xmodmap") == [("-e", "add mod3 = Scroll_Lock")] * 2


@pytest.mark.unit
class TestKeySwitch:
    """Test KeySwitch."""

    @pytest.mark.asyncio
    async def test_toggle_num_lock(self, panel, keyboard):
        switch = panel.switch("Num Lock")

        assert await switch.toggle(True) is True

        assert switch.state is True
        assert ("led", "named", "Num Lock") in keyboard.commands("xset")
        assert keyboard.commands("numlockx") == [("on",)]

    @pytest.mark.asyncio
    async def test_toggle_without_state_flips(self, panel, keyboard):
        keyboard.set_state("Scroll Lock", True)
        switch = panel.switch("Scroll Lock")

        assert await switch.toggle() is False
        assert await switch.toggle() is True
        assert keyboard.states["Scroll Lock"] is True

    @pytest.mark.asyncio
    async def test_scroll_lock_keymap_prepared_once(self, panel, keyboard):
        switch = panel.switch("Scroll Lock")

        await switch.toggle(True)
        await switch.toggle(False)

        assert keyboard.commands("xmodmap") == [("-e", "add mod3 = Scroll_Lock")]
        assert keyboard.commands("numlockx") == []

    @pytest.mark.asyncio
    async def test_numlockx_can_be_disabled(self, keyboard):
        panel = KeyPanel(AppConfig(use_numlockx=False, prepare_scroll_lock=False), executor=keyboard)

        await panel.switch("Num Lock").toggle(True)
        await panel.switch("Scroll Lock").toggle(True)

        assert keyboard.commands("numlockx") == []
        assert keyboard.commands("xmodmap") == []
        assert keyboard.states["Num Lock"] is True
        panel.destroy()

    @pytest.mark.asyncio
    async def test_state_changed_events(self, panel, keyboard):
        recorder = EventRecorder()
        switch = panel.switch("Num Lock")
        switch.add_listener(recorder, EventRecorder.on_event)

        await panel.reload()
        await switch.toggle(True)
        await panel.reload()
        keyboard.set_state("Num Lock", False)
        await panel.reload()

        assert recorder.events == [
            (SwitchEvent.STATE_CHANGED, "Num Lock", False),
            (SwitchEvent.STATE_CHANGED, "Num Lock", True),
            (SwitchEvent.STATE_CHANGED, "Num Lock", False),
        ]

    @pytest.mark.asyncio
    async def test_change_failed_event(self, panel, keyboard):
        recorder = EventRecorder()
        switch = panel.switch("Num Lock")
        switch.add_listener(recorder, EventRecorder.on_event)
        keyboard.stuck.add("Num Lock")

        with pytest.raises(KeyStateCouldNotBeChangedError) as exc_info:
            await switch.toggle(True)

        assert exc_info.value.attempts == 3
        assert (SwitchEvent.CHANGE_FAILED, "Num Lock", None) in recorder.events
        assert switch.state is False

    @pytest.mark.asyncio
    async def test_listener_error_is_isolated(self, panel):
        class Broken:
            def on_event(self, event, switch):
                raise RuntimeError("widget gone wrong")

        broken, recorder = Broken(), EventRecorder()
        switch = panel.switch("Scroll Lock")
        switch.add_listener(broken, Broken.on_event)
        switch.add_listener(recorder, EventRecorder.on_event)

        await switch.toggle(True)

        assert recorder.events[-1] == (SwitchEvent.STATE_CHANGED, "Scroll Lock", True)

    @pytest.mark.asyncio
    async def test_collected_listener_stops_receiving(self, panel):
        recorder = EventRecorder()
        switch = panel.switch("Num Lock")
        ref = switch.add_listener(recorder, EventRecorder.on_event)
        del recorder
        gc.collect()

        await panel.reload()

        assert ref.is_collected

    @pytest.mark.asyncio
    async def test_destroyed_switch_ignores_reloads(self, panel, keyboard):
        switch = panel.switch("Num Lock")
        switch.destroy()
        keyboard.set_state("Num Lock", True)

        await panel.reload()

        assert switch.state is None

    @pytest.mark.asyncio
    async def test_callback_misuse_in_listener_propagates(self, panel):
        prepare = once(lambda: None)
        prepare()

        class Misusing:
            def on_event(self, event, switch):
                prepare()

        listener = Misusing()
        switch = panel.switch("Scroll Lock")
        switch.add_listener(listener, Misusing.on_event)

        with pytest.raises(OnceCallbackAlreadyCalled):
            await switch.toggle(True)
