"""
Editor state: one buffer, the cursor and the active prompt.
"""

import os
import time
import logging
from typing import List, Optional, Tuple

from .buffer import Buffer
from .highlight import Highlight
from .keys import Key, ctrl_key, is_printable
from .prompt import Prompt, PromptStatus
from .syntax import select_profile
from .. import __version__
from ..config import EditorConfig
from ..utils.fileio import load_lines, save_file
from ..utils.search import IncrementalSearch

logger = logging.getLogger(__name__)

VERSION_BANNER = "termpad -- v{}"
HELP_MESSAGE = "HELP: Ctrl-S save | Ctrl-Q quit | Ctrl-F find"

Spans = List[Tuple[bytes, Highlight]]


class Editor:
    """Handles cursor movement, scrolling and key dispatch for a buffer."""

    def __init__(self, config: Optional[EditorConfig] = None,
                 screenrows: int = 24, screencols: int = 80) -> None:
        self.config = config or EditorConfig()
        self.buffer = Buffer(tab_stop=self.config.tab_stop)

        self.cx = 0
        self.cy = 0
        self.rx = 0
        self.rowoff = 0
        self.coloff = 0
        self.screenrows = screenrows
        self.screencols = screencols

        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_message_time = 0.0
        self.quit_times = self.config.quit_times

        self.search: Optional[IncrementalSearch] = None
        self.save_prompt: Optional[Prompt] = None

    def set_window_size(self, height: int, width: int) -> None:
        """Size the text area, leaving room for the status and message bars."""

        self.screenrows = max(1, height - 2)
        self.screencols = max(1, width)

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_message_time = time.time()

    def get_message(self) -> str:
        """Get the text for the message bar."""

        if self.search:
            return self.search.message

        if self.save_prompt:
            return self.save_prompt.message

        if time.time() - self.status_message_time < self.config.status_message_timeout:
            return self.status_message

        return ""

    def open(self, filename: str) -> None:
        """Load a file into the buffer."""

        self.filename = filename
        self.buffer.set_profile(select_profile(filename))
        self.buffer.load_lines(load_lines(filename))

        self.cx = self.cy = 0
        self.rowoff = self.coloff = 0
        logger.info("Opened %s (%d rows)", filename, self.buffer.numrows)

    def new_file(self, filename: str) -> None:
        """Start an empty buffer that will be saved under filename."""

        self.filename = filename
        self.buffer.set_profile(select_profile(filename))

    def save(self) -> None:
        """Save the buffer, asking for a filename first if there is none."""

        if not self.filename:
            self.save_prompt = Prompt("Save as: {} (ESC to cancel)")
            return

        self._write()

    def _write(self) -> None:
        result = save_file(self.filename, self.buffer.serialize())

        if result.ok:
            self.buffer.mark_saved()
            self.set_status_message(f"{result.written} bytes written to disk")
            return

        self.set_status_message(f"Can't save! I/O error: {result.error}")

    def _handle_save_prompt(self, key: int) -> None:
        status = self.save_prompt.feed(key)

        if status is PromptStatus.EDITING:
            return

        name = self.save_prompt.text
        self.save_prompt = None

        if status is PromptStatus.CANCELLED:
            self.set_status_message("Save aborted")
            return

        self.filename = name
        self.buffer.set_profile(select_profile(name))
        self._write()

    def start_search(self) -> None:
        self.search = IncrementalSearch(self)

    def move_cursor(self, key: int) -> None:
        """Move the cursor one step, wrapping at row ends."""

        row = self.buffer.get_row(self.cy)

        if key == Key.ARROW_LEFT:
            if self.cx != 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = self.buffer.rows[self.cy].size

        elif key == Key.ARROW_RIGHT:
            if row and self.cx < row.size:
                self.cx += 1
            elif row and self.cx == row.size:
                self.cy += 1
                self.cx = 0

        elif key == Key.ARROW_UP:
            if self.cy != 0:
                self.cy -= 1

        elif key == Key.ARROW_DOWN:
            if self.cy < self.buffer.numrows:
                self.cy += 1

        row = self.buffer.get_row(self.cy)
        rowlen = row.size if row else 0
        if self.cx > rowlen:
            self.cx = rowlen

    def _page(self, key: int) -> None:
        if key == Key.PAGE_UP:
            self.cy = self.rowoff
        else:
            self.cy = min(self.rowoff + self.screenrows - 1, self.buffer.numrows)

        step = Key.ARROW_UP if key == Key.PAGE_UP else Key.ARROW_DOWN
        for _ in range(self.screenrows):
            self.move_cursor(step)

    def process_key(self, key: int) -> bool:
        """Handle a single logical key. Returns False if should quit."""

        if self.search:
            if self.search.step(key) is not PromptStatus.EDITING:
                self.search = None
            return True

        if self.save_prompt:
            self._handle_save_prompt(key)
            return True

        if key == ctrl_key('q'):
            if self.buffer.dirty and self.quit_times > 0:
                self.set_status_message(
                    f"WARNING: Unsaved changes. Press Ctrl-Q {self.quit_times} more times to quit."
                )
                self.quit_times -= 1
                return True
            return False

        if key == Key.ENTER:
            self.cy, self.cx = self.buffer.insert_newline(self.cy, self.cx)

        elif key == ctrl_key('s'):
            self.save()

        elif key == ctrl_key('f'):
            self.start_search()

        elif key == Key.HOME:
            self.cx = 0

        elif key == Key.END:
            row = self.buffer.get_row(self.cy)
            if row:
                self.cx = row.size

        elif key in (Key.BACKSPACE, ctrl_key('h'), Key.DEL):
            if key == Key.DEL:
                self.move_cursor(Key.ARROW_RIGHT)
            self.cy, self.cx = self.buffer.delete_char(self.cy, self.cx)

        elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
            self._page(key)

        elif key in (Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT):
            self.move_cursor(key)

        elif key in (ctrl_key('l'), Key.ESCAPE):
            pass

        elif is_printable(key):
            self.cy, self.cx = self.buffer.insert_char(self.cy, self.cx, key)

        self.quit_times = self.config.quit_times
        return True

    def scroll(self) -> None:
        """Adjust the offsets so the cursor stays on screen."""

        self.rx = 0
        row = self.buffer.get_row(self.cy)
        if row:
            self.rx = row.cx_to_rx(self.cx)

        if self.cy < self.rowoff:
            self.rowoff = self.cy
        if self.cy >= self.rowoff + self.screenrows:
            self.rowoff = self.cy - self.screenrows + 1

        if self.rx < self.coloff:
            self.coloff = self.rx
        if self.rx >= self.coloff + self.screencols:
            self.coloff = self.rx - self.screencols + 1

    def draw_rows(self) -> List[Optional[Spans]]:
        """
        Build the styled spans for every screen line.

        Returns:
            One entry per screen line: the spans of the visible part of the
            row, or None past the end of the buffer
        """

        lines: List[Optional[Spans]] = []

        for y in range(self.screenrows):
            row = self.buffer.get_row(y + self.rowoff)
            lines.append(row.spans(self.coloff, self.screencols) if row else None)

        return lines

    def welcome_message(self) -> str:
        return VERSION_BANNER.format(__version__)[:self.screencols]

    def status_bar(self) -> Tuple[str, str]:
        """Get the left and right parts of the status bar."""

        name = os.path.basename(self.filename)[:20] if self.filename else "[No Name]"
        modified = "(modified)" if self.buffer.dirty else ""
        left = f"{name} - {self.buffer.numrows} lines {modified}"

        filetype = self.buffer.profile.name if self.buffer.profile else "no ft"
        right = f"{filetype} | {self.cy + 1}/{self.buffer.numrows}"

        return left, right
