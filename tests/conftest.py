# tests/conftest.py
"""Shared fixtures for intervalsummary tests."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure intervalsummary package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def write_csv(tmp_path):
    """Write lines to a CSV file under tmp_path and return its path."""
    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def times_csv(write_csv) -> Path:
    """Two 100 s intervals with a 100 s gap between them."""
    return write_csv("times.csv", [
        "Start,End,Label",
        "2020-01-01 00:00:00,2020-01-01 00:01:40,Night1",
        "2020-01-01 00:03:20,2020-01-01 00:05:00,Night2",
    ])


@pytest.fixture
def data_csv(write_csv) -> Path:
    """Events: one inside Night1, one crossing its end, one in the gap."""
    return write_csv("data.csv", [
        "Start,End,Duration(s)",
        "2020-01-01 00:00:10,2020-01-01 00:00:30,20",
        "2020-01-01 00:00:50,2020-01-01 00:03:30,160",
        "2020-01-01 00:06:00,2020-01-01 00:06:10,10",
    ])


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop stderr handlers added by configure_logging() (e.g. via cli.main)."""
    yield
    logger = logging.getLogger("intervalsummary")
    for h in logger.handlers[:]:
        if isinstance(h, logging.StreamHandler):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
