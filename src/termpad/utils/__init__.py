"""
Utility package for search and file access.
"""

from .fileio import load_lines, save_file, SaveResult
from .search import SearchEngine, SearchSession, SearchMatch, IncrementalSearch

__all__ = [
    'load_lines',
    'save_file',
    'SaveResult',
    'SearchEngine',
    'SearchSession',
    'SearchMatch',
    'IncrementalSearch'
]
