"""
Core package for the text buffer engine.

This package implements the row storage model, the tab expansion projection,
the syntax highlighter with its lexical profiles and the Buffer class that
owns all structural edits. The Editor class in core.editor adds cursor
handling and key dispatch on top of a Buffer.
"""

from .buffer import Buffer
from .highlight import Highlight
from .row import Row
from .syntax import LexicalProfile, highlight_row, select_profile

__all__ = ['Buffer', 'Highlight', 'Row', 'LexicalProfile', 'highlight_row', 'select_profile']
