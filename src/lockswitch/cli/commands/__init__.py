"""CLI commands for lockswitch."""

from .config import config
from .keys import reset_keymap, set_key, status, toggle, watch

__all__ = ["config", "reset_keymap", "set_key", "status", "toggle", "watch"]
