"""Keyboard status, key definitions and state control."""

from .keys import KEY_NAMES, NUM_LOCK, SCROLL_LOCK, Key, build_keys
from .reloader import KeyStatusReloader
from .state import MAX_ATTEMPTS, DriveOperation, DriveOutcome, KeyStateController
from .status import Status, find_status, normalize_whitespace, parse_status
from .tools import KeyboardTools, NumLockX, XModMap, XSet

__all__ = [
    "KEY_NAMES",
    "MAX_ATTEMPTS",
    "NUM_LOCK",
    "SCROLL_LOCK",
    "DriveOperation",
    "DriveOutcome",
    "Key",
    "KeyboardTools",
    "KeyStateController",
    "KeyStatusReloader",
    "NumLockX",
    "Status",
    "XModMap",
    "XSet",
    "build_keys",
    "find_status",
    "normalize_whitespace",
    "parse_status",
]
