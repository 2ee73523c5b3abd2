"""
Logging configuration for hosts embedding the engine.

Every module logs through ``logging.getLogger(__name__)``; this helper
attaches a formatter (and optionally a rotating log file) to the package
logger so that engine messages can be routed without touching the root
logger of the host application.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "stellarlife"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Configure the package logger once and return it.

    Repeated calls only update the level; handlers are installed on the
    first call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if getattr(logger, "_stellarlife_configured", False):
        return logger

    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    logger._stellarlife_configured = True
    return logger
