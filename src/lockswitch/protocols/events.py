"""Events emitted by key switches."""

from enum import Enum


class SwitchEvent(Enum):
    """Events from a `KeySwitch`."""

    STATE_CHANGED = "state_changed"  # Known key state changed (toggle or external)
    CHANGE_FAILED = "change_failed"  # Toggle could not reach the requested state
