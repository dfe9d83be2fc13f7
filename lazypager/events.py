"""Logical input events consumed by the dispatcher.

Keys are plain string tokens: named keys use the upper-case constants below
and printable characters are passed through as one-character strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
ESC = "ESC"
TAB = "TAB"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
CTRL_C = "CTRL_C"
SPACE = " "
# Recognised escape sequence with no binding in either mode.
UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Resize:
    """Terminal size change, serialized with key events."""

    width: int
    height: int


Event = Union[str, Resize]


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()
