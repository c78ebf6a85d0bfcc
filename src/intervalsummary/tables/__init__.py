"""Table and timestamp collaborators: CSV rows in, numeric times out."""

from intervalsummary.tables.csv_table import CsvTable, Row
from intervalsummary.tables.timestamps import format_time, looks_numeric, parse_time

__all__ = [
    "CsvTable",
    "Row",
    "format_time",
    "looks_numeric",
    "parse_time",
]
