"""Headless panel and switches that a UI binds to."""

from .panel import KeyPanel
from .switch import KeySwitch

__all__ = ["KeyPanel", "KeySwitch"]
