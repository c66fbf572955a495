"""
UI package for the curses terminal front end.

This package implements the WindowManager, which paints the editor state,
and the InputHandler, which turns curses key codes into logical keys.
"""

from .window import WindowManager
from .input_handler import InputHandler, decode_key

__all__ = ['WindowManager', 'InputHandler', 'decode_key']
