"""
intervalsummary: per-interval statistics for time-stamped event recordings.

This package provides:
- load_intervals: labeled reference intervals from a times table
- aggregate / IntervalSweep: single forward sweep of events over intervals
- build_report / save_report: delimited text report with derived quantities
- run_summary: the whole pipeline, as used by the ``intervalsummary`` command

For logging configuration in standalone scripts:
    ```python
    from intervalsummary.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from intervalsummary.utils.logging import configure_logging, get_logger

from intervalsummary.config import SummaryConfig, SummarySettings
from intervalsummary.runner import RunResult, run_summary
from intervalsummary.summary import (
    Event,
    Interval,
    IntervalSweep,
    MissingColumnError,
    OutputOpenError,
    aggregate,
    build_report,
    load_intervals,
    save_report,
)

# Ensure intervalsummary logger has NullHandler so logs don't propagate to root
# when no application has configured logging. The CLI calls configure_logging()
# to add a real handler.
_logger = logging.getLogger("intervalsummary")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "Event",
    "Interval",
    "IntervalSweep",
    "MissingColumnError",
    "OutputOpenError",
    "RunResult",
    "SummaryConfig",
    "SummarySettings",
    "aggregate",
    "build_report",
    "configure_logging",
    "get_logger",
    "load_intervals",
    "run_summary",
    "save_report",
]

__version__ = "0.1.0"
