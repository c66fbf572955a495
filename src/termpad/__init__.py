"""
termpad - a small terminal text editor with incremental search and syntax highlighting.
"""

__version__ = "0.1.0"
