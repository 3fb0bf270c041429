"""Callback wrappers with explicit lifetimes.

- `weak`: call a function with an owner held by weak reference
- `once`: allow a function to run a single time
- `WeakCallbackSet`: fan out to many weak callbacks, each removable
"""

from .markers import Marker
from .once import CALLED, OnceCallback, once
from .weak import COLLECTED, WeakCallback, weak
from .weak_set import WeakCallbackRef, WeakCallbackSet

__all__ = [
    "CALLED",
    "COLLECTED",
    "Marker",
    "OnceCallback",
    "WeakCallback",
    "WeakCallbackRef",
    "WeakCallbackSet",
    "once",
    "weak",
]
