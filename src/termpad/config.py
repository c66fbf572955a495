"""
Editor configuration loaded from an optional TOML file.
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Final

import toml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR: Final[str] = "TERMPAD_CONFIG"
DEFAULT_CONFIG_PATH: Final[str] = os.path.join("~", ".config", "termpad", "config.toml")
DEFAULT_LOG_PATH: Final[str] = os.path.join("~", ".cache", "termpad", "termpad.log")
LOG_LEVELS: Final[Tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EditorConfig:
    """Settings shared by the buffer, the editor and the logging setup."""
    tab_stop: int = 8
    quit_times: int = 3
    status_message_timeout: int = 5
    log_file: str = DEFAULT_LOG_PATH
    log_level: str = "INFO"


def _positive_int(section: Dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = section.get(key, default)

    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        logger.warning("Invalid value %r for editor.%s, using %d", value, key, default)
        return default

    return value


def load_config(path: Optional[str] = None) -> EditorConfig:
    """
    Load the configuration, falling back to defaults.

    The file is looked up at path, then $TERMPAD_CONFIG, then
    ~/.config/termpad/config.toml. A missing or malformed file never
    raises; problems are logged and the defaults are kept.
    """

    config = EditorConfig()

    path = path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    path = os.path.expanduser(path)

    if not os.path.exists(path):
        logger.debug("No config file at %s, using defaults", path)
        return config

    try:
        data = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.error("Could not read config %s: %s", path, e)
        return config

    editor = data.get("editor", {})
    if isinstance(editor, dict):
        config.tab_stop = _positive_int(editor, "tab_stop", config.tab_stop, 1)
        config.quit_times = _positive_int(editor, "quit_times", config.quit_times, 0)
        config.status_message_timeout = _positive_int(
            editor, "status_message_timeout", config.status_message_timeout, 0
        )

    logging_section = data.get("logging", {})
    if isinstance(logging_section, dict):
        config.log_file = str(logging_section.get("file", config.log_file))
        level = str(logging_section.get("level", config.log_level)).upper()
        if level in LOG_LEVELS:
            config.log_level = level
        else:
            logger.warning("Invalid value %r for logging.level, using %s", level, config.log_level)

    logger.info("Loaded config from %s", path)
    return config
