"""Data models for lockswitch."""

from .config import DEFAULT_CONFIG_PATH, AppConfig
from .persistence import PydanticPersistence

__all__ = ["DEFAULT_CONFIG_PATH", "AppConfig", "PydanticPersistence"]
