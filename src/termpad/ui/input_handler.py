"""
Input handler module for processing keyboard events.
"""

import curses
import logging
from typing import Dict, Optional, Final

from ..core.keys import Key
from .window import WindowManager

logger = logging.getLogger(__name__)

CURSES_KEYS: Final[Dict[int, Key]] = {
    curses.KEY_LEFT: Key.ARROW_LEFT,
    curses.KEY_RIGHT: Key.ARROW_RIGHT,
    curses.KEY_UP: Key.ARROW_UP,
    curses.KEY_DOWN: Key.ARROW_DOWN,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_DC: Key.DEL,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
    ord('\n'): Key.ENTER,
    ord('\r'): Key.ENTER,
}


def decode_key(ch: int) -> Optional[int]:
    """
    Translate a curses key code into a logical key.

    Returns:
        The logical key, or None for codes the editor does not handle
    """

    if ch in CURSES_KEYS:
        return CURSES_KEYS[ch]

    if 0 <= ch < 256:
        return ch

    return None


class InputHandler:
    """Feeds keyboard input to the editor."""

    def __init__(self, window_manager: WindowManager) -> None:
        self.window_manager = window_manager
        self.editor = window_manager.editor

    def handle_input(self, ch: int) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        if ch == curses.KEY_RESIZE:
            self.window_manager.resize()
            return True

        key = decode_key(ch)
        if key is None:
            logger.debug("Ignoring key code %d", ch)
            return True

        return self.editor.process_key(key)
