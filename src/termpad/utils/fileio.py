"""
Reading and writing files as flat newline separated lines.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    """Outcome of writing a buffer to disk."""
    ok: bool
    written: int = 0
    error: Optional[str] = None


def load_lines(path: str) -> List[bytes]:
    """
    Read a file and split it into lines.

    Trailing newline and carriage return bytes are stripped from every line.
    Errors opening or reading the file propagate to the caller.
    """

    with open(path, 'rb') as f:
        lines = [line.rstrip(b'\r\n') for line in f]

    logger.info("Loaded %d lines from %s", len(lines), path)
    return lines


def save_file(path: str, data: bytes) -> SaveResult:
    """
    Write serialized buffer content to a file.

    Args:
        path: Destination file, created or truncated
        data: Bytes to write

    Returns:
        SaveResult: Number of bytes written, or the I/O error on failure
    """

    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        logger.warning("Failed to save %s: %s", path, e)
        return SaveResult(ok=False, error=e.strerror or str(e))

    logger.info("Wrote %d bytes to %s", len(data), path)
    return SaveResult(ok=True, written=len(data))
