"""Process-wide logging for the Espólios API.

Call ``setup_logging()`` once at startup. The level comes from ``LOG_LEVEL``
(``.env`` or environment); DEBUG adds logger names and per-field ingestion
events to the output.
"""

from __future__ import annotations

import logging
import sys

DEBUG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

# Third-party loggers that drown request logs below WARNING
QUIET_LOGGERS = ("uvicorn.access", "httpx", "urllib3", "requests", "pymongo", "multipart")


def setup_logging() -> None:
    from ..config import settings

    debug = settings.log_level == "DEBUG"
    logging.basicConfig(
        level=settings.log_level,
        format=DEBUG_FORMAT if debug else DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if debug else "%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("espolios.startup").info("Logging configured: level=%s", settings.log_level)
