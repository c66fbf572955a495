"""
Logical keys delivered to the editor after terminal decoding.

Printable characters and control combinations are plain byte values, named
navigation keys live above the byte range.
"""

from enum import IntEnum


def ctrl_key(key: str) -> int:
    """Return the code of Ctrl plus the given letter."""

    return ord(key) & 0x1f


class Key(IntEnum):
    """Named keys."""

    ENTER = 13
    ESCAPE = 27
    BACKSPACE = 127
    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DEL = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


def is_control(key: int) -> bool:
    return key < 32 or key == 127


def is_printable(key: int) -> bool:
    """Check whether a key inserts a character."""

    return not is_control(key) and key < 128
