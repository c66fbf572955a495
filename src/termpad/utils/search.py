"""
Incremental search over the rendered text of the buffer.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

from ..core.buffer import Buffer
from ..core.highlight import Highlight
from ..core.keys import Key
from ..core.prompt import Prompt, PromptStatus

if TYPE_CHECKING:
    from ..core.editor import Editor

logger = logging.getLogger(__name__)

FORWARD = 1
BACKWARD = -1


@dataclass
class SearchMatch:
    """Represents a search result with position and match information."""
    row: int
    column: int
    rendered_column: int


@dataclass
class SearchSession:
    """State kept between the keystrokes of one search prompt."""
    last_match: Optional[int] = None
    direction: int = FORWARD
    saved_overlay: Optional[Tuple[int, List[Highlight]]] = None


class SearchEngine:
    """Finds literal matches row by row and tags them in the highlight array."""

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer

    def restore_overlay(self, session: SearchSession) -> None:
        """Put back the highlight tags saved before the last match was painted."""

        if session.saved_overlay is None:
            return

        index, saved = session.saved_overlay
        session.saved_overlay = None

        row = self.buffer.get_row(index)
        if row is None or len(row.highlight) != len(saved):
            logger.debug("Dropping stale search overlay for row %d", index)
            return

        row.highlight[:] = saved

    def advance(self, query: str, direction: int, session: SearchSession) -> Optional[SearchMatch]:
        """
        Find the next row containing query, wrapping around the buffer.

        Args:
            query: Literal text to look for in rendered rows
            direction: FORWARD or BACKWARD
            session: Search state, updated with the new match

        Returns:
            Optional[SearchMatch]: The match found, or None
        """

        self.restore_overlay(session)

        numrows = self.buffer.numrows
        if not query or not numrows:
            return None

        needle = query.encode('utf-8')

        current = session.last_match
        if current is None or not 0 <= current < numrows:
            current = -1
            direction = FORWARD
        session.direction = direction

        for _ in range(numrows):
            current += direction
            if current == -1:
                current = numrows - 1
            elif current == numrows:
                current = 0

            row = self.buffer.rows[current]
            position = row.rendered.find(needle)
            if position == -1:
                continue

            session.last_match = current
            session.saved_overlay = (current, list(row.highlight))

            end = min(position + len(needle), row.rsize)
            row.highlight[position:end] = [Highlight.MATCH] * (end - position)

            return SearchMatch(
                row=current,
                column=row.rx_to_cx(position),
                rendered_column=position,
            )

        return None

    def end(self, session: SearchSession) -> None:
        """Finish a session, removing any match highlighting."""

        self.restore_overlay(session)
        session.last_match = None
        session.direction = FORWARD


class IncrementalSearch:
    """Search prompt that moves the cursor to a match on every keystroke."""

    TEMPLATE = "Search: {} (ESC/Arrows/Enter)"

    def __init__(self, editor: 'Editor') -> None:
        self.editor = editor
        self.prompt = Prompt(self.TEMPLATE)
        self.session = SearchSession()
        self.engine = SearchEngine(editor.buffer)

        self.saved_cursor = (editor.cx, editor.cy, editor.coloff, editor.rowoff)

    @property
    def message(self) -> str:
        return self.prompt.message

    def step(self, key: int) -> PromptStatus:
        """Process one key of the search prompt."""

        status = self.prompt.feed(key)

        if status is not PromptStatus.EDITING:
            self.engine.end(self.session)
            if status is PromptStatus.CANCELLED:
                editor = self.editor
                editor.cx, editor.cy, editor.coloff, editor.rowoff = self.saved_cursor
            return status

        if key in (Key.ARROW_RIGHT, Key.ARROW_DOWN):
            direction = FORWARD
        elif key in (Key.ARROW_LEFT, Key.ARROW_UP):
            direction = BACKWARD
        else:
            self.session.last_match = None
            direction = FORWARD

        match = self.engine.advance(self.prompt.text, direction, self.session)
        if match:
            self.editor.cy = match.row
            self.editor.cx = match.column
            self.editor.rowoff = self.editor.buffer.numrows

        return status
