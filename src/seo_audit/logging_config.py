"""Logging setup for the seo-audit command line."""

import logging
import sys
from pathlib import Path
from typing import Optional

from seo_audit.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Client libraries that log every request at INFO
QUIET_LOGGERS = ('httpx', 'httpcore')


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Route audit logs to stderr and, optionally, a file.

    stdout is reserved for the report so ``--json`` output can be piped.

    Args:
        level: Log level name; LOG_LEVEL from the environment when omitted.
            Unknown names fall back to INFO.
        log_file: Also append log records to this file, creating its
            directory if needed
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
