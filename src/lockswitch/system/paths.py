"""Locating programs on the system."""

import shutil

from lockswitch.exceptions import PathError


def find_in_path(program: str) -> str:
    """
    Find `program` in ``PATH``.

    Args:
        program: Executable name, e.g. ``"xset"``

    Returns:
        The full path for the program

    Raises:
        PathError: If the program could not be found
    """
    path = shutil.which(program)
    if not path:
        raise PathError(program)
    return path
