"""Logging setup: structlog events rendered and routed by the stdlib root logger.

The console gets a colored renderer while ``ENVIRONMENT`` is ``development``
(the default). Whenever a log directory is in play every record is JSON, written
to ``collection.log``, with errors also copied to ``errors.log``.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

APP_LOG_FILE = "collection.log"
ERROR_LOG_FILE = "errors.log"


def _renders_json(log_dir: Path | None) -> bool:
    return log_dir is not None or os.getenv("ENVIRONMENT", "development") != "development"


def _rotating_handler(path: Path, level: int, max_bytes: int, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    handler.setLevel(level)
    return handler


def configure_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    console: bool = True,
) -> list[logging.Handler]:
    """Install the root handlers and point structlog at them.

    Args:
        log_level: Minimum level name; unknown names mean INFO
        log_dir: Directory for the rotating log files (None for no files)
        console: Whether records are also echoed to stderr

    Returns:
        The handlers now attached to the root logger
    """
    level = logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_handler(log_dir / APP_LOG_FILE, level, 5 * 1024 * 1024, 3))
        handlers.append(_rotating_handler(log_dir / ERROR_LOG_FILE, logging.ERROR, 1024 * 1024, 2))

    # structlog renders the final line; the handlers only add the newline.
    plain = logging.Formatter("%(message)s")
    for handler in handlers:
        handler.setFormatter(plain)

    root_logger = logging.getLogger()
    for old in root_logger.handlers:
        old.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if _renders_json(log_dir)
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return handlers
