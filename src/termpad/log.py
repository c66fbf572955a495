"""
Logging setup. Curses owns the terminal, so records only go to a file.
"""

import os
import logging
import logging.handlers

from .config import EditorConfig

LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-22s - %(message)s"


def setup_logging(config: EditorConfig) -> None:
    """Attach a rotating file handler to the root logger."""

    log_file = os.path.expanduser(config.log_file)
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1024 * 1024, backupCount=3, encoding='utf-8'
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
