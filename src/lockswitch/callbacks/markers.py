"""Reserved return values used by the callback wrappers."""


class Marker:
    """A unique value a wrapper returns instead of calling its callback.

    Markers compare by identity only. A wrapped callback must never return
    the marker of its own wrapper, see ``ReturnValueError``.
    """

    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"<{self._name}>"

    def __reduce__(self):
        raise TypeError(f"{self!r} cannot be pickled")


def callback_name(callback: object) -> str:
    """Best effort name of a callable, used in error messages."""
    name = getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None)
    return name if isinstance(name, str) else repr(callback)
