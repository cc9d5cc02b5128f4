"""
Logging setup for the parser service and batch CLI.
Library modules only declare `logging.getLogger(__name__)`; entry points
call setup_logging once at start-up.
"""

import logging
import sys
from typing import Optional
from config import config

# Loggers owned by this project; their level can differ from the root level
PARSER_LOGGERS = ("extractors", "validators", "main")

# Chatty third-party loggers
QUIET_LOGGERS = ("uvicorn.access", "httpx", "multipart")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True,
    stream=None,
    parser_log_level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the root logger and the parser's own loggers.

    Args:
        log_level: Root level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file name inside LOG_DIR; falls back to config.LOG_FILE
        console_output: Whether to add a console handler
        stream: Console stream, defaults to stdout
        parser_log_level: Level for the extractor, validator and batch loggers,
            e.g. DEBUG to see which amount strategy matched

    Returns:
        Configured root logger
    """
    level = _level(log_level or config.LOG_LEVEL)
    log_file = log_file or config.LOG_FILE

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    handlers = []
    if console_output:
        handlers.append(logging.StreamHandler(stream or sys.stdout))
    if log_file:
        handlers.append(logging.FileHandler(config.get_log_path(log_file), mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    parser_level = parser_log_level or config.PARSER_LOG_LEVEL
    for name in PARSER_LOGGERS:
        # NOTSET defers to the root level
        logging.getLogger(name).setLevel(_level(parser_level) if parser_level else logging.NOTSET)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (typically __name__)."""
    return logging.getLogger(name)
