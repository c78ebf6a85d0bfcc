"""intervalsummary command line entry point.

Usage: intervalsummary <input.csv> -times <times.csv> [-out <output.csv>] [options]
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from intervalsummary.config import SummaryConfig
from intervalsummary.runner import EXIT_FATAL, run_summary
from intervalsummary.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intervalsummary",
        description="Summarize time-stamped events over labeled time spans.",
    )
    parser.add_argument("data", nargs="?", help="Input data file (events or spans).")
    parser.add_argument(
        "-times", "--times", dest="times",
        help="Labelled time spans file.",
    )
    parser.add_argument(
        "-out", "--out", dest="out",
        help="Output summary file (default: standard output).",
    )
    parser.add_argument(
        "--scale", type=float, default=None,
        help="Interval time scaling, e.g. 0.016667 for minutes (default: 1).",
    )
    parser.add_argument(
        "--scale-prop", type=float, default=None,
        help="Proportion scaling, e.g. 100 for percent (default: 1).",
    )
    parser.add_argument(
        "--count-offset", type=int, default=None,
        help="Offset added to the count, e.g. -1 (default: 0).",
    )
    parser.add_argument(
        "--header", default=None,
        help="Custom header line, comma separated; empty for no header line.",
    )
    parser.add_argument(
        "--separator", default=None,
        help="Field separator text, e.g. ';' or '; '; '\\t' for TAB (default: ',').",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Settings file (default: per-user intervalsummary.json).",
    )
    parser.add_argument(
        "--save-config", action="store_true",
        help="Save the report options given here to the settings file.",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Diagnostic level: DEBUG, INFO, WARNING, ERROR (default: INFO).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = SummaryConfig.load(config_path=args.config)
    settings = config.settings.with_overrides(
        data_path=args.data,
        times_path=args.times,
        out_path=args.out,
        scale=args.scale,
        scale_prop=args.scale_prop,
        count_offset=args.count_offset,
        header=args.header,
        separator=args.separator,
    )

    if args.save_config:
        # Paths are per-run; only the report options are worth keeping.
        config.settings = replace(settings, data_path=None, times_path=None, out_path=None)
        config.save()

    if not settings.data_path or not settings.times_path:
        if not settings.data_path:
            logger.error("Input file not specified.")
        if not settings.times_path:
            logger.error("Times file not specified.")
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    result = run_summary(settings)
    if result.status != 0:
        return EXIT_FATAL
    logger.debug(f"Done: {result.errors} errors, {result.warnings} warnings")
    return 0


if __name__ == "__main__":
    sys.exit(main())
