"""
@file: logging_setup.py
Root logger configuration for the Weaviate query client.

Configuration (LOGGING section):
    - LOG_FILE: Rotating log file (default: 'logs/weaviate_query.log')
    - LEVEL: Level for the log file and the root logger (default: 'INFO')
    - CONSOLE_LEVEL: Level for console output (default: same as LEVEL)
    - HTTP_LEVEL: Level for the httpx/httpcore loggers (default: 'WARNING')

httpx logs every request at INFO; HTTP_LEVEL sets those loggers separately.

Usage:
    from weaviate_query.logging_setup import setup_logging
    setup_logging(config=get_config("config/config.yaml"))
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_LOG_FILE = "logs/weaviate_query.log"
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(message)s'
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5
HTTP_LOGGERS = ("httpx", "httpcore")


class LineBufferedRotatingFileHandler(logging.handlers.RotatingFileHandler):
    """Rotating file handler whose stream is line buffered, so each record reaches disk as it is written."""
    def _open(self):
        return open(self.baseFilename, self.mode, encoding=self.encoding, buffering=1)


def _level(name: Any, fallback: int) -> int:
    if isinstance(name, int):
        return name
    return getattr(logging, str(name).upper(), fallback) if name else fallback


def _logging_section(config: Any, config_path: Optional[str]) -> Dict[str, Any]:
    """Read the LOGGING section from a Config, or load one from config_path; {} when neither exists."""
    if config is None:
        from weaviate_query.config import get_config
        try:
            config = get_config(config_path)
        except FileNotFoundError:
            return {}
    return config.get_nested('LOGGING', {}) or {}


def setup_logging(LOG_FILE: Optional[str] = None, LEVEL: Optional[str] = None,
                  config_path: Optional[str] = None, config: Any = None) -> None:
    """
    Configure the root logger with a rotating file handler and a console handler.

    Explicit arguments win over the LOGGING section. Existing root handlers are
    closed and replaced, so calling this twice does not duplicate output.

    Args:
        LOG_FILE: Log file path.
        LEVEL: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        config_path: config.yaml to read the LOGGING section from when config is not given.
        config: Loaded Config.
    """
    section = {} if LOG_FILE and LEVEL else _logging_section(config, config_path)
    log_file = LOG_FILE or section.get('LOG_FILE') or DEFAULT_LOG_FILE
    level = _level(LEVEL or section.get('LEVEL'), logging.INFO)
    console_level = _level(section.get('CONSOLE_LEVEL'), level)
    http_level = _level(section.get('HTTP_LEVEL'), logging.WARNING)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    file_handler = LineBufferedRotatingFileHandler(log_file, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console_handler.setLevel(console_level)

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(min(level, console_level))
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    logging.getLogger(__name__).debug(
        f"Logging configured: file={log_file} level={logging.getLevelName(level)} "
        f"console={logging.getLevelName(console_level)}"
    )
