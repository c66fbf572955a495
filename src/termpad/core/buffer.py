"""
Buffer module for row storage and text editing.
"""

import logging
from collections import deque
from typing import Iterable, List, Optional, Tuple

from .row import Row, DEFAULT_TAB_STOP
from .syntax import LexicalProfile, highlight_row

logger = logging.getLogger(__name__)


class Buffer:
    """
    Ordered collection of rows with structural editing and dirty tracking.

    Row and column arguments are clamped to valid bounds rather than
    rejected. Positions returned by the editing operations are (row, column)
    pairs in raw coordinates, ready to be used as the new cursor.
    """

    def __init__(self, tab_stop: int = DEFAULT_TAB_STOP,
                 profile: Optional[LexicalProfile] = None) -> None:
        if tab_stop < 1:
            raise ValueError("Tab stop must be at least 1")

        self.rows: List[Row] = []
        self.dirty = 0
        self.tab_stop = tab_stop
        self.profile = profile

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def get_row(self, index: int) -> Optional[Row]:
        """Get a row by its current index, or None past the end."""

        if not 0 <= index < len(self.rows):
            return None

        return self.rows[index]

    def _renumber(self, start: int) -> None:
        for index in range(start, len(self.rows)):
            self.rows[index].index = index

    def _carried_state(self, index: int) -> bool:
        return index > 0 and self.rows[index - 1].comment_open

    def update_syntax(self, index: int) -> int:
        """
        Re-highlight a row and cascade into following rows.

        A following row is queued only while the comment state it was last
        highlighted with differs from what its predecessor now carries.

        Returns:
            int: Number of rows highlighted
        """

        if not 0 <= index < len(self.rows):
            return 0

        pending = deque([index])
        count = 0

        while pending:
            current = pending.popleft()
            row = self.rows[current]

            carried = self._carried_state(current)
            row.highlight, row.comment_open = highlight_row(row.rendered, self.profile, carried)
            row.comment_open_in = carried
            count += 1

            following = current + 1
            if following < len(self.rows) and self.rows[following].comment_open_in != row.comment_open:
                pending.append(following)

        return count

    def _sync_syntax(self, index: int) -> None:
        """Re-highlight from index only if its carried comment state went stale."""

        if not 0 <= index < len(self.rows):
            return

        if self.rows[index].comment_open_in != self._carried_state(index):
            self.update_syntax(index)

    def rehighlight_all(self) -> None:
        """Highlight every row from the top, ignoring previous state."""

        carried = False
        for row in self.rows:
            row.highlight, row.comment_open = highlight_row(row.rendered, self.profile, carried)
            row.comment_open_in = carried
            carried = row.comment_open

    def set_profile(self, profile: Optional[LexicalProfile]) -> None:
        """Switch the active lexical profile and re-highlight the whole buffer."""

        self.profile = profile
        self.rehighlight_all()

    def insert_row(self, at: int, content: bytes = b'') -> Row:
        """Insert a new row at the specified position."""

        at = max(0, min(at, len(self.rows)))

        row = Row(index=at, raw=bytearray(content), tab_stop=self.tab_stop)
        self.rows.insert(at, row)
        self._renumber(at + 1)

        self.update_syntax(at)
        self.dirty += 1

        logger.debug("Inserted row %d (%d bytes)", at, len(content))
        return row

    def delete_row(self, at: int) -> None:
        """Delete the row at the specified position."""

        if not 0 <= at < len(self.rows):
            return

        del self.rows[at]
        self._renumber(at)

        self._sync_syntax(at)
        self.dirty += 1

        logger.debug("Deleted row %d", at)

    def insert_char(self, row: int, col: int, ch: int) -> Tuple[int, int]:
        """
        Insert one byte into a row.

        Args:
            row: Row index, a row is appended first when it equals numrows
            col: Raw offset within the row
            ch: Byte value to insert

        Returns:
            The position just after the inserted byte
        """

        if not 0 <= ch <= 255:
            raise ValueError("Byte value must be between 0 and 255")

        row = max(0, min(row, len(self.rows)))
        if row == len(self.rows):
            self.insert_row(len(self.rows), b'')

        target = self.rows[row]
        col = max(0, min(col, target.size))

        target.insert_char(col, ch)
        self.update_syntax(row)
        self.dirty += 1

        return row, col + 1

    def delete_char(self, row: int, col: int) -> Tuple[int, int]:
        """
        Delete the byte before the given position.

        At column 0 the row is joined onto the end of the previous row.

        Returns:
            The position of the cursor after the deletion
        """

        row = max(0, row)
        if row >= len(self.rows):
            return row, col

        target = self.rows[row]
        col = max(0, min(col, target.size))

        if col == 0 and row == 0:
            return row, col

        if col > 0:
            target.delete_char(col - 1)
            self.update_syntax(row)
            self.dirty += 1
            return row, col - 1

        previous = self.rows[row - 1]
        join_col = previous.size

        previous.append(bytes(target.raw))
        self.update_syntax(row - 1)
        self.dirty += 1

        self.delete_row(row)
        return row - 1, join_col

    def insert_newline(self, row: int, col: int) -> Tuple[int, int]:
        """
        Break a row in two at the given position.

        Returns:
            The start of the new line
        """

        row = max(0, min(row, len(self.rows)))
        col = 0 if row == len(self.rows) else max(0, min(col, self.rows[row].size))

        if col == 0:
            self.insert_row(row, b'')
            return row + 1, 0

        tail = self.rows[row].truncate(col)
        self.update_syntax(row)
        self.insert_row(row + 1, tail)

        return row + 1, 0

    def load_lines(self, lines: Iterable[bytes]) -> None:
        """Replace the buffer content with the given lines and mark it clean."""

        self.rows = []
        for line in lines:
            self.insert_row(len(self.rows), line)

        self.dirty = 0

    def serialize(self) -> bytes:
        """Join all rows, each terminated by a newline."""

        return b''.join(bytes(row.raw) + b'\n' for row in self.rows)

    def lines(self) -> List[bytes]:
        return [bytes(row.raw) for row in self.rows]

    def mark_saved(self) -> None:
        self.dirty = 0
