"""Event loop primitives."""

from .interval import Interval

__all__ = ["Interval"]
