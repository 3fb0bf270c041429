"""lockswitch: Num Lock and Scroll Lock switches kept in sync with the keyboard."""

__version__ = "0.1.0"

from .keyboard import KeyStateController, KeyStatusReloader
from .panel import KeyPanel, KeySwitch

__all__ = [
    "KeyPanel",
    "KeyStateController",
    "KeyStatusReloader",
    "KeySwitch",
]
