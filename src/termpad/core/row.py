"""
Row storage and the tab-expansion render projection.

A row keeps its raw bytes as the authoritative content. The rendered form
(tabs expanded to spaces) and the per-character highlight tags are derived
from it and rebuilt on every mutation.
"""

from typing import List, Tuple
from dataclasses import dataclass, field

from .highlight import Highlight

TAB = 0x09
SPACE = 0x20
DEFAULT_TAB_STOP = 8


def project(raw: bytes, tab_stop: int = DEFAULT_TAB_STOP) -> bytes:
    """
    Expand tabs in raw row content.

    Each tab advances to the next multiple of tab_stop, always emitting at
    least one space. Every other byte is copied through unchanged.
    """

    rendered = bytearray()
    for ch in raw:
        if ch != TAB:
            rendered.append(ch)
            continue

        rendered.append(SPACE)
        while len(rendered) % tab_stop != 0:
            rendered.append(SPACE)

    return bytes(rendered)


def raw_to_rendered(raw: bytes, offset: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Convert a raw byte offset into a rendered column."""

    column = 0
    for ch in raw[:max(0, offset)]:
        if ch == TAB:
            column += (tab_stop - 1) - (column % tab_stop)
        column += 1

    return column


def rendered_to_raw(raw: bytes, column: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """
    Convert a rendered column back into a raw byte offset.

    Returns the offset of the first byte whose rendered span extends past
    column, or len(raw) when the column lies beyond the row.
    """

    current = 0
    for offset, ch in enumerate(raw):
        if ch == TAB:
            current += (tab_stop - 1) - (current % tab_stop)
        current += 1

        if current > column:
            return offset

    return len(raw)


@dataclass
class Row:
    """One line of the buffer."""

    index: int
    raw: bytearray = field(default_factory=bytearray)
    tab_stop: int = DEFAULT_TAB_STOP
    rendered: bytes = b''
    highlight: List[Highlight] = field(default_factory=list)
    comment_open: bool = False
    comment_open_in: bool = False

    def __post_init__(self) -> None:
        self.raw = bytearray(self.raw)
        self.update_render()

    @property
    def size(self) -> int:
        return len(self.raw)

    @property
    def rsize(self) -> int:
        return len(self.rendered)

    def update_render(self) -> None:
        """Rebuild the rendered form and reset highlighting to normal."""

        self.rendered = project(bytes(self.raw), self.tab_stop)
        self.highlight = [Highlight.NORMAL] * len(self.rendered)

    def cx_to_rx(self, cx: int) -> int:
        return raw_to_rendered(self.raw, cx, self.tab_stop)

    def rx_to_cx(self, rx: int) -> int:
        return rendered_to_raw(self.raw, rx, self.tab_stop)

    def insert_char(self, at: int, ch: int) -> None:
        """Insert a single byte, appending when at is out of range."""

        if not 0 <= at <= len(self.raw):
            at = len(self.raw)

        self.raw.insert(at, ch)
        self.update_render()

    def delete_char(self, at: int) -> bool:
        """Delete the byte at the given offset. Returns False when out of range."""

        if not 0 <= at < len(self.raw):
            return False

        del self.raw[at]
        self.update_render()
        return True

    def append(self, data: bytes) -> None:
        self.raw.extend(data)
        self.update_render()

    def truncate(self, length: int) -> bytes:
        """Cut the row at length and return the removed tail."""

        length = max(0, min(length, len(self.raw)))
        tail = bytes(self.raw[length:])
        del self.raw[length:]
        self.update_render()
        return tail

    def spans(self, start: int = 0, width: int = -1) -> List[Tuple[bytes, Highlight]]:
        """
        Group the visible slice of the rendered row into styled spans.

        Args:
            start: First rendered column to include
            width: Number of columns to include, negative for the rest of the row

        Returns:
            A list of (text, highlight) tuples with adjacent equal tags merged
        """

        end = len(self.rendered) if width < 0 else min(len(self.rendered), start + width)
        result: List[Tuple[bytes, Highlight]] = []

        run_start = start
        for column in range(start, end):
            if self.highlight[column] != self.highlight[run_start]:
                result.append((self.rendered[run_start:column], self.highlight[run_start]))
                run_start = column

        if run_start < end:
            result.append((self.rendered[run_start:end], self.highlight[run_start]))

        return result
