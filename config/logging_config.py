"""
Logging configuration.

All modules obtain loggers through ``get_logger(__name__)`` so the handler and
format are installed once for the whole process.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Install the stream handler on the root logger (idempotent)."""
    global _configured
    if _configured:
        if level:
            logging.getLogger().setLevel(level.upper())
        return

    if level is None:
        from config.settings import settings
        level = settings.log_level

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
