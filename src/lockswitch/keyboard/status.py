"""Parsing keyboard LED status from ``xset q`` output."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from lockswitch.exceptions import StatusParseError

# e.g. "00: Caps Lock:   off    01: Num Lock:    on"
STATUS_RE = re.compile(r"\b(?P<id>\d+):\s+(?P<name>(?:\w+\s+)*\w+):\s+(?P<state>on|off)")
SPACE_RE = re.compile(r"\s+")


class Status(BaseModel):
    """Snapshot of one key at query time."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Key name as reported by xset, e.g. 'Num Lock'")
    id: int = Field(description="LED index reported by xset")
    state: Literal["on", "off"] = Field(description="Whether the key was on or off")

    @property
    def is_on(self) -> bool:
        return self.state == "on"


def normalize_whitespace(text: str) -> str:
    """
    Collapse whitespace runs into single spaces and strip the ends.

    Raises:
        StatusParseError: If nothing but whitespace is present
    """
    result = " ".join(word for word in SPACE_RE.split(text) if word)
    if not result:
        raise StatusParseError(text, "empty name")
    return result


def parse_status(text: str) -> list[Status]:
    """
    Parse every ``<id>: <name>: on|off`` record in `text`.

    Text that does not match is ignored. Records are returned in the order
    they appear.

    Args:
        text: Output of ``xset q``, or any text containing such records

    Returns:
        The parsed statuses, possibly empty

    Raises:
        StatusParseError: If a record has an empty name
    """
    return [
        Status(
            name=normalize_whitespace(match["name"]),
            id=int(match["id"]),
            state=match["state"],
        )
        for match in STATUS_RE.finditer(text)
    ]


def find_status(statuses: list[Status], name: str) -> Status | None:
    """Return the first status for key `name`, if any."""
    return next((status for status in statuses if status.name == name), None)
