"""
Syntax highlighting module for the editor.

Highlighting is driven by a small lexical profile per language. Language
detection asks Pygments for the lexer matching a filename and falls back to
the profile's own filename patterns.
"""

import os
import logging
from dataclasses import dataclass
from functools import cached_property
from typing import List, Tuple, Optional, Final

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .highlight import Highlight

logger = logging.getLogger(__name__)

HL_NUMBERS: Final[int] = 1 << 0
HL_STRINGS: Final[int] = 1 << 1

WHITESPACE: Final[bytes] = b' \t\n\v\f\r'
PUNCTUATION: Final[bytes] = b',.()+-/*=~%<>[]:;{}'
QUOTES: Final[bytes] = b'"\''
BACKSLASH: Final[int] = ord('\\')
DOT: Final[int] = ord('.')


@dataclass(frozen=True)
class LexicalProfile:
    """Comment markers, keywords and flags for one language."""

    name: str
    filematch: Tuple[str, ...] = ()
    lexer_names: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    secondary_keywords: Tuple[str, ...] = ()
    singleline_comment: Optional[str] = None
    multiline_comment_start: Optional[str] = None
    multiline_comment_end: Optional[str] = None
    flags: int = 0

    @cached_property
    def keyword_table(self) -> Tuple[Tuple[bytes, Highlight], ...]:
        """All keywords with their tag, longest first."""

        table = [(word.encode(), Highlight.KEYWORD1) for word in self.keywords]
        table += [(word.encode(), Highlight.KEYWORD2) for word in self.secondary_keywords]
        table.sort(key=lambda entry: len(entry[0]), reverse=True)

        return tuple(table)


C_PROFILE: Final[LexicalProfile] = LexicalProfile(
    name='c',
    filematch=('.c', '.h', '.cpp', '.hpp'),
    lexer_names=('C', 'C++'),
    keywords=(
        'switch', 'if', 'while', 'for', 'break', 'continue', 'return', 'else',
        'struct', 'union', 'typedef', 'static', 'enum', 'class', 'case',
    ),
    secondary_keywords=(
        'int', 'long', 'double', 'float', 'char', 'unsigned', 'signed',
        'void', 'size_t', 'ssize_t', 'bool',
    ),
    singleline_comment='//',
    multiline_comment_start='/*',
    multiline_comment_end='*/',
    flags=HL_NUMBERS | HL_STRINGS,
)

PYTHON_PROFILE: Final[LexicalProfile] = LexicalProfile(
    name='python',
    filematch=('.py', '.pyw'),
    lexer_names=('Python', 'Python 2.x'),
    keywords=(
        'def', 'class', 'if', 'elif', 'else', 'for', 'while', 'return', 'import',
        'from', 'as', 'with', 'try', 'except', 'finally', 'raise', 'pass',
        'break', 'continue', 'lambda', 'yield', 'global', 'nonlocal', 'assert',
        'del', 'in', 'is', 'not', 'and', 'or', 'async', 'await',
    ),
    secondary_keywords=(
        'True', 'False', 'None', 'self', 'int', 'str', 'float', 'list', 'dict',
        'tuple', 'set', 'bool', 'bytes',
    ),
    singleline_comment='#',
    flags=HL_NUMBERS | HL_STRINGS,
)

JAVASCRIPT_PROFILE: Final[LexicalProfile] = LexicalProfile(
    name='javascript',
    filematch=('.js', '.mjs', '.cjs'),
    lexer_names=('JavaScript',),
    keywords=(
        'function', 'var', 'let', 'const', 'if', 'else', 'for', 'while', 'do',
        'return', 'switch', 'case', 'break', 'continue', 'new', 'class',
        'extends', 'import', 'export', 'default', 'try', 'catch', 'finally',
        'throw', 'typeof', 'instanceof', 'this',
    ),
    secondary_keywords=('true', 'false', 'null', 'undefined', 'NaN', 'Infinity'),
    singleline_comment='//',
    multiline_comment_start='/*',
    multiline_comment_end='*/',
    flags=HL_NUMBERS | HL_STRINGS,
)

PROFILES: Final[Tuple[LexicalProfile, ...]] = (C_PROFILE, PYTHON_PROFILE, JAVASCRIPT_PROFILE)


def is_separator(ch: int) -> bool:
    """Check whether a byte separates words (0 stands for end of row)."""

    return ch == 0 or ch in WHITESPACE or ch in PUNCTUATION


def _match_keyword(rendered: bytes, pos: int,
                   keywords: Tuple[Tuple[bytes, Highlight], ...]) -> Optional[Tuple[int, Highlight]]:
    """Find the longest keyword at pos that is followed by a separator."""

    for word, tag in keywords:
        end = pos + len(word)
        if not rendered.startswith(word, pos):
            continue

        following = rendered[end] if end < len(rendered) else 0
        if is_separator(following):
            return len(word), tag

    return None


def highlight_row(rendered: bytes, profile: Optional[LexicalProfile],
                  comment_open: bool = False) -> Tuple[List[Highlight], bool]:
    """
    Classify every character of a rendered row.

    Args:
        rendered: The rendered row text
        profile: Lexical profile of the active language, or None
        comment_open: Whether a block comment is still open from the previous row

    Returns:
        The highlight tags and whether a block comment is open at the end of the row
    """

    size = len(rendered)
    hl = [Highlight.NORMAL] * size

    if profile is None:
        return hl, False

    scs = profile.singleline_comment.encode() if profile.singleline_comment else b''
    mcs = profile.multiline_comment_start.encode() if profile.multiline_comment_start else b''
    mce = profile.multiline_comment_end.encode() if profile.multiline_comment_end else b''
    keywords = profile.keyword_table

    prev_sep = True
    in_string = 0
    in_comment = comment_open
    number_has_dot = False

    i = 0
    while i < size:
        ch = rendered[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if scs and not in_string and not in_comment and rendered.startswith(scs, i):
            hl[i:] = [Highlight.COMMENT] * (size - i)
            break

        if mcs and mce and not in_string:
            if in_comment:
                if rendered.startswith(mce, i):
                    hl[i:i + len(mce)] = [Highlight.MLCOMMENT] * len(mce)
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue

                hl[i] = Highlight.MLCOMMENT
                i += 1
                continue

            if rendered.startswith(mcs, i):
                hl[i:i + len(mcs)] = [Highlight.MLCOMMENT] * len(mcs)
                i += len(mcs)
                in_comment = True
                continue

        if profile.flags & HL_STRINGS:
            if in_string:
                hl[i] = Highlight.STRING
                if ch == BACKSLASH and i + 1 < size:
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue

                if ch == in_string:
                    in_string = 0
                i += 1
                prev_sep = True
                continue

            if ch in QUOTES:
                in_string = ch
                hl[i] = Highlight.STRING
                i += 1
                continue

        if profile.flags & HL_NUMBERS:
            continues_number = prev_hl == Highlight.NUMBER
            is_digit = 0x30 <= ch <= 0x39

            if (is_digit and (prev_sep or continues_number)) or \
                    (ch == DOT and continues_number and not number_has_dot):
                if not continues_number:
                    number_has_dot = False
                if ch == DOT:
                    number_has_dot = True

                hl[i] = Highlight.NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            match = _match_keyword(rendered, i, keywords)
            if match:
                length, tag = match
                hl[i:i + length] = [tag] * length
                i += length
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return hl, in_comment


def select_profile(filename: Optional[str]) -> Optional[LexicalProfile]:
    """
    Pick the lexical profile for a filename.

    Pygments is asked first; when the lexer it finds is not covered by any
    profile, the profiles' own filename patterns are tried. A pattern
    starting with '.' must equal the extension, any other pattern matches
    as a substring of the filename.
    """

    if not filename:
        return None

    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        lexer = None

    if lexer is not None:
        for profile in PROFILES:
            if lexer.name in profile.lexer_names:
                logger.debug("Selected profile %s for %s via lexer %s", profile.name, filename, lexer.name)
                return profile

    _, ext = os.path.splitext(filename)
    for profile in PROFILES:
        for pattern in profile.filematch:
            is_ext = pattern.startswith('.')
            if (is_ext and ext == pattern) or (not is_ext and pattern in filename):
                logger.debug("Selected profile %s for %s by pattern %r", profile.name, filename, pattern)
                return profile

    return None
