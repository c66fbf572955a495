"""
Window management module for painting the editor.
"""

import curses
from typing import Dict, List, Tuple, Final

from ..core.editor import Editor
from ..core.highlight import Highlight

HIGHLIGHT_COLORS: Final[Dict[Highlight, int]] = {
    Highlight.COMMENT: 1,      # Cyan
    Highlight.MLCOMMENT: 1,    # Cyan
    Highlight.KEYWORD1: 2,     # Yellow
    Highlight.KEYWORD2: 3,     # Green
    Highlight.STRING: 4,       # Magenta
    Highlight.NUMBER: 5,       # Red
    Highlight.MATCH: 6,        # Blue
}


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


def split_control(text: bytes) -> List[Tuple[str, bool]]:
    """
    Split rendered bytes into printable runs and control symbols.

    Control bytes are replaced by '@' plus their code, or '?' above 26.

    Returns:
        A list of (text, is_control) tuples
    """

    parts: List[Tuple[str, bool]] = []
    run = bytearray()

    for ch in text:
        if ch < 32 or ch == 127:
            if run:
                parts.append((run.decode('utf-8', errors='replace'), False))
                run = bytearray()
            parts.append((chr(ord('@') + ch) if ch <= 26 else '?', True))
            continue

        run.append(ch)

    if run:
        parts.append((run.decode('utf-8', errors='replace'), False))

    return parts


class WindowManager:
    """Paints the editor state onto the curses screen."""

    def __init__(self, stdscr: 'curses.window', editor: Editor):
        self.stdscr = stdscr
        self.editor = editor
        self.height, self.width = stdscr.getmaxyx()
        self.color_pairs_initialized = False

        self.init_colors()
        self.editor.set_window_size(self.height, self.width)

    def init_colors(self) -> None:
        """Initialize color pairs for syntax highlighting."""

        if self.color_pairs_initialized or not curses.has_colors():
            return

        curses.start_color()
        curses.use_default_colors()

        curses.init_pair(HIGHLIGHT_COLORS[Highlight.COMMENT], curses.COLOR_CYAN, -1)
        curses.init_pair(HIGHLIGHT_COLORS[Highlight.KEYWORD1], curses.COLOR_YELLOW, -1)
        curses.init_pair(HIGHLIGHT_COLORS[Highlight.KEYWORD2], curses.COLOR_GREEN, -1)
        curses.init_pair(HIGHLIGHT_COLORS[Highlight.STRING], curses.COLOR_MAGENTA, -1)
        curses.init_pair(HIGHLIGHT_COLORS[Highlight.NUMBER], curses.COLOR_RED, -1)
        curses.init_pair(HIGHLIGHT_COLORS[Highlight.MATCH], curses.COLOR_BLUE, -1)

        self.color_pairs_initialized = True

    def resize(self) -> None:
        """Handle terminal resize."""

        self.height, self.width = self.stdscr.getmaxyx()
        self.editor.set_window_size(self.height, self.width)
        self.stdscr.clear()

    def refresh_all(self) -> None:
        """Repaint the whole screen."""

        self.editor.scroll()
        self.stdscr.erase()

        self.draw_rows()
        self.draw_status()
        self.draw_message()
        self.place_cursor()

        self.stdscr.refresh()

    def _attr_for(self, tag: Highlight) -> int:
        pair = HIGHLIGHT_COLORS.get(tag)
        if pair is None or not self.color_pairs_initialized:
            return curses.A_NORMAL

        return curses.color_pair(pair)

    def draw_rows(self) -> None:
        """Draw the visible rows, or tildes past the end of the buffer."""

        editor = self.editor
        lines = editor.draw_rows()

        for y, spans in enumerate(lines):
            if spans is not None:
                self._draw_spans(y, spans)
                continue

            if editor.buffer.numrows == 0 and y == editor.screenrows // 3:
                welcome = editor.welcome_message()
                padding = (editor.screencols - len(welcome)) // 2
                line = ("~" + " " * (padding - 1) if padding else "") + welcome
                safe_addstr(self.stdscr, y, 0, line)
                continue

            safe_addstr(self.stdscr, y, 0, "~")

    def _draw_spans(self, y: int, spans: List[Tuple[bytes, Highlight]]) -> None:
        x = 0
        for text, tag in spans:
            attr = self._attr_for(tag)
            for part, is_control in split_control(text):
                safe_addstr(self.stdscr, y, x, part, curses.A_REVERSE if is_control else attr)
                x += len(part)

    def draw_status(self) -> None:
        """Draw the status bar in reverse video."""

        left, right = self.editor.status_bar()
        width = self.editor.screencols

        line = left[:width]
        if len(line) + len(right) <= width:
            line += " " * (width - len(line) - len(right)) + right
        else:
            line = line.ljust(width)

        safe_addstr(self.stdscr, self.editor.screenrows, 0, line, curses.A_REVERSE)

    def draw_message(self) -> None:
        safe_addstr(self.stdscr, self.editor.screenrows + 1, 0, self.editor.get_message())

    def place_cursor(self) -> None:
        editor = self.editor

        try:
            self.stdscr.move(editor.cy - editor.rowoff, editor.rx - editor.coloff)
        except curses.error:
            pass
