"""Row formatting for per-round CSV reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from account_loadgen.core.durations import format_duration

if TYPE_CHECKING:
    from account_loadgen.models.round_report import RoundReport

REPORT_HEADER = ["Username", "Balance", "ActualDuration", "SumDuration"]


def format_balance(balance: float | None) -> str:
    """Six-decimal balance, or an empty cell when the lookup failed."""
    if balance is None:
        return ""
    return f"{balance:f}"


def report_filename(prefix: str, unix_seconds: int, round_number: int) -> str:
    """File name for a round; the round number keeps same-second rounds apart."""
    return f"{prefix}_{unix_seconds}_{round_number:04d}.csv"


def format_report_rows(report: RoundReport) -> list[list[str]]:
    """Header plus one row per account, in slot order."""
    actual = format_duration(report.wall_clock_ns)
    summed = format_duration(report.summed_ns)
    rows = [list(REPORT_HEADER)]
    for row in report.rows:
        rows.append([row.username, format_balance(row.balance), actual, summed])
    return rows
