"""
Logging utilities for the intervalsummary package.

Library code only ever calls ``get_logger(__name__)``. The command line entry
point (or any script embedding the pipeline) calls ``configure_logging()`` to
get diagnostics on stderr.

All data warnings (unknown headings, short rows, duration mismatches) and
data errors (inverted or out-of-order intervals) are emitted through these
loggers; nothing is printed directly.

Example Usage
-------------
    ```python
    from intervalsummary.utils.logging import configure_logging, get_logger
    configure_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("Opening times: %s", path)
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "intervalsummary"

# Default format for diagnostics on stderr
DEFAULT_FMT = "%(levelname)s: %(message)s"
DEBUG_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the intervalsummary logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        INTERVALSUMMARY_LOG_LEVEL env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to a short ``LEVEL: message`` format,
        or a verbose one at DEBUG level.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding new ones (allows
        reconfiguration). If False, skip if handler already present.
    """
    if level is None:
        level = os.environ.get("INTERVALSUMMARY_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if fmt is None:
        fmt = DEBUG_FMT if level <= logging.DEBUG else DEFAULT_FMT
    if datefmt is None:
        datefmt = DEFAULT_DATEFMT

    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        # Skip if we already have a stderr StreamHandler (e.g. from a previous call)
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'intervalsummary' logger.
    Otherwise, returns logging.getLogger(name).
    """
    if name is None:
        name = PACKAGE_LOGGER
    return logging.getLogger(name)
