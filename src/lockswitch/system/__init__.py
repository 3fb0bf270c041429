"""Running external programs."""

from .executor import SubprocessExecutor
from .paths import find_in_path

__all__ = ["SubprocessExecutor", "find_in_path"]
