"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from lockswitch.keyboard import KEY_NAMES, MAX_ATTEMPTS

from .persistence import PydanticPersistence

CONFIG_DIR = Path.home() / ".lockswitch"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    reload_interval: float = Field(
        default=5.0,
        gt=0,
        description="How often to re-read the keyboard status (seconds)",
    )
    max_attempts: int = Field(
        default=MAX_ATTEMPTS,
        ge=1,
        description="Attempts to switch a key before reporting a failure",
    )
    keys: list[str] = Field(
        default_factory=lambda: list(KEY_NAMES),
        description="Keys shown in the panel, in order",
    )
    use_numlockx: bool = Field(
        default=True,
        description="Also run numlockx when switching Num Lock",
    )
    prepare_scroll_lock: bool = Field(
        default=True,
        description="Bind Scroll Lock with xmodmap before the first switch",
    )

    @field_validator("keys")
    @classmethod
    def validate_keys(cls, keys: list[str]) -> list[str]:
        unknown = [key for key in keys if key not in KEY_NAMES]
        if unknown:
            raise ValueError(f"unknown key(s): {', '.join(unknown)}")
        if len(set(keys)) != len(keys):
            raise ValueError("keys must not repeat")
        return keys

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return the defaults.

        Args:
            path: Path to config file (default: ~/.lockswitch/config.json)

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
