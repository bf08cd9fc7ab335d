"""Centralized logging configuration."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single console handler to the root logger.

    Safe to call more than once; only the first call installs the handler,
    later calls just adjust the level.
    """
    global _configured

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _configured:
        return root_logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    # OpenSearch logs every request at INFO; keep it quiet unless asked for.
    logging.getLogger("opensearch").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _configured = True
    return root_logger
