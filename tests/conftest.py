"""Pytest fixtures for tests."""

import asyncio
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from lockswitch.exceptions import ExecError
from lockswitch.keyboard import Key, Status
from lockswitch.protocols import CommandResult


class FakeKeyboard:
    """
    In-memory keyboard that answers xset, numlockx and xmodmap commands.

    Attributes:
        states: LED state per key name, in xset order
        calls: Every command received, as (program, *args)
        stuck: Keys whose LED ignores switch commands
        failing: When True every command raises ExecError
    """

    def __init__(self):
        self.states = {"Caps Lock": False, "Num Lock": False, "Scroll Lock": False}
        self.calls: list[tuple[str, ...]] = []
        self.stuck: set[str] = set()
        self.failing = False

    def set_state(self, name: str, state: bool) -> None:
        self.states[name] = state

    def query_text(self) -> str:
        leds = "    ".join(
            f"{index:02d}: {name}:   {'on' if on else 'off'}"
            for index, (name, on) in enumerate(self.states.items())
        )
        return (
            "Keyboard Control:\n"
            "  auto repeat:  on    key click percent:  0    LED mask:  00000000\n"
            "  XKB indicators:\n"
            f"    {leds}\n"
            "  auto repeat delay:  660    repeat rate:  25\n"
        )

    def _switch(self, name: str, state: bool) -> None:
        if name not in self.stuck:
            self.states[name] = state

    def commands(self, program: str) -> list[tuple[str, ...]]:
        return [call[1:] for call in self.calls if call[0] == program]

    async def execute(self, command: str, *args: str) -> CommandResult:
        await asyncio.sleep(0)
        program = Path(command).name
        self.calls.append((program, *args))

        if self.failing:
            raise ExecError((command, *args), 1, "", "unable to open display")

        if program == "xset":
            if args == ("q",):
                return CommandResult(stdout=self.query_text(), stderr="")
            if args[:2] in (("led", "named"), ("-led", "named")):
                self._switch(args[2], args[0] == "led")
        elif program == "numlockx":
            self._switch("Num Lock", args[0] == "on")

        return CommandResult(stdout="", stderr="")


class FakeDevice:
    """
    In-memory keys for controller tests, without any command parsing.

    Attributes:
        actions: Every (key, requested state) action run
        stuck: (key, state) pairs that never take effect
        ignore: Number of upcoming actions per key that have no effect
        errors: Number of upcoming actions per key that raise ExecError
        queries: Number of status queries made
        delay: Seconds each action and query takes
    """

    def __init__(self):
        self.states = {"Num Lock": False, "Scroll Lock": False}
        self.actions: list[tuple[str, bool]] = []
        self.stuck: set[tuple[str, bool]] = set()
        self.ignore: dict[str, int] = {}
        self.errors: dict[str, int] = {}
        self.queries = 0
        self.delay = 0.0

    def key(self, name: str) -> Key:
        async def turn_on() -> None:
            await self._act(name, True)

        async def turn_off() -> None:
            await self._act(name, False)

        return Key(name=name, turn_on=turn_on, turn_off=turn_off)

    async def _act(self, name: str, state: bool) -> None:
        await asyncio.sleep(self.delay)
        self.actions.append((name, state))

        if self.errors.get(name, 0) > 0:
            self.errors[name] -= 1
            raise ExecError(("xset", "led", "named", name), 1, "", "flaky")
        if (name, state) in self.stuck:
            return
        if self.ignore.get(name, 0) > 0:
            self.ignore[name] -= 1
            return
        self.states[name] = state

    async def query(self) -> list[Status]:
        await asyncio.sleep(self.delay)
        self.queries += 1
        return [
            Status(name=name, id=index, state="on" if on else "off")
            for index, (name, on) in enumerate(self.states.items())
        ]


@pytest.fixture(autouse=True)
def fake_program_paths(monkeypatch):
    """Resolve keyboard tools without requiring them in PATH."""
    monkeypatch.setattr("lockswitch.keyboard.tools.find_in_path", lambda program: f"/usr/bin/{program}")


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def keyboard():
    """A fake keyboard executor with every LED off."""
    return FakeKeyboard()


@pytest.fixture
def device():
    """Fake keys for controller tests, all off."""
    return FakeDevice()
