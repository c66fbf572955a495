"""
Highlight tags assigned to each rendered character of a row.
"""

from enum import IntEnum


class Highlight(IntEnum):
    """Display category of a rendered character."""

    NORMAL = 0
    COMMENT = 1
    MLCOMMENT = 2
    KEYWORD1 = 3
    KEYWORD2 = 4
    STRING = 5
    NUMBER = 6
    MATCH = 7
