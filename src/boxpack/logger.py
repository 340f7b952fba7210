"""Logging setup for the command-line runner.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, by the entry point, never on import.
"""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.INFO,
                      log_file: Path | str | None = None) -> logging.Logger:
    """
    Attach a console handler (and optionally a daily rotating file handler)
    to the ``boxpack`` logger.

    Calling it again replaces the handlers it installed before.
    """
    logger = logging.getLogger("boxpack")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=str(path),
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
