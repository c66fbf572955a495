"""
Entry point for termpad.
"""

import os
import sys
import curses
import logging
import argparse

from .config import load_config
from .log import setup_logging
from .core.editor import Editor, HELP_MESSAGE
from .ui.window import WindowManager
from .ui.input_handler import InputHandler

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="termpad - terminal text editor"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=str,
        help="File to open"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a TOML config file"
    )
    return parser.parse_args()


def run(stdscr: 'curses.window', editor: Editor) -> None:
    """Main loop: repaint, then dispatch one key."""

    stdscr.keypad(True)
    # Ctrl-S, Ctrl-Q and Ctrl-C must reach the editor as keys
    curses.raw()
    stdscr.timeout(100)

    window_manager = WindowManager(stdscr, editor)
    input_handler = InputHandler(window_manager)

    while True:
        window_manager.refresh_all()

        ch = stdscr.getch()
        if ch == -1:
            continue

        if not input_handler.handle_input(ch):
            break


def main() -> None:
    """Entry point for the application."""

    args = parse_args()
    config = load_config(args.config)
    setup_logging(config)

    editor = Editor(config)
    if args.file:
        try:
            if os.path.exists(args.file):
                editor.open(args.file)
            else:
                editor.new_file(args.file)
        except OSError as e:
            print(f"Error loading {args.file}: {e}", file=sys.stderr)
            sys.exit(1)

    editor.set_status_message(HELP_MESSAGE)

    os.environ.setdefault("ESCDELAY", "25")
    curses.wrapper(run, editor)
    logger.info("Exiting")


if __name__ == "__main__":
    main()
