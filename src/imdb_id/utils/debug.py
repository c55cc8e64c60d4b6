"""Logging setup for imdb-id.

Configures the ``imdb_id`` logger once, writing to stderr so that stdout only
ever carries the selected result. Debug output is controlled by the
IMDB_ID_DEBUG environment variable.
"""

import logging
import os
import sys
from typing import Optional

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    return os.getenv("IMDB_ID_DEBUG", "0").lower() in {"1", "true", "yes"}


def setup_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("imdb_id")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
    _logger = logger
    return logger

