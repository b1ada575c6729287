"""
Logging setup for the ``canhousing`` package logger.

Records go to stdout and, when configured, to a log file. Both the dashboard
server and the summary CLI call ``setup_logging`` before loading listings.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from canhousing.config import get_config

PACKAGE_LOGGER = "canhousing"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """Attach handlers to the package logger.

    Args:
        level: Log level name. Defaults to ``CANHOUSING_LOG_LEVEL`` (INFO).
        log_file: Extra file to log to. Defaults to ``CANHOUSING_LOG_FILE``.
        force: Replace handlers installed by an earlier call.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_config().logging
    numeric_level = getattr(logging, (level or settings.level).upper(), logging.INFO)
    log_file = log_file or settings.log_file

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    package_logger.addHandler(_handler(logging.StreamHandler(sys.stdout), numeric_level))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        package_logger.addHandler(
            _handler(logging.FileHandler(path, encoding="utf-8"), numeric_level)
        )

    package_logger.propagate = False
    # Flask's request log
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace, configuring logging on first use."""
    if not _configured:
        setup_logging()
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
