"""Summarize the sample sleep log in minutes and percent.

Run from the repository root:
    python examples/sleep_summary.py
"""

from pathlib import Path

from intervalsummary import SummarySettings, run_summary
from intervalsummary.utils.logging import configure_logging

configure_logging(level="INFO")

here = Path(__file__).resolve().parent
settings = SummarySettings(
    data_path=str(here / "sleep_events.csv"),
    times_path=str(here / "sleep_times.csv"),
    scale=1 / 60,       # minutes
    scale_prop=100,     # percent
    count_offset=-1,    # wake transitions rather than sleep bouts
)

result = run_summary(settings)
print()
print(result.report[["Label", "Count", "Duration", "TimeUntilFirst", "Proportion"]].to_string(index=False))
