"""CSV persistence of measurement rounds."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING

from account_loadgen.core.report_format import format_report_rows, report_filename
from account_loadgen.services.errors import ReportingError
from account_loadgen.utils.logger import get_logger

if TYPE_CHECKING:
    from account_loadgen.models.round_report import RoundReport

logger = get_logger(__name__)


class CsvReportWriter:
    """Writes one CSV file per round into ``output_dir``."""

    def __init__(self, output_dir: str | Path, filename_prefix: str = "log") -> None:
        self.output_dir = Path(output_dir)
        self.filename_prefix = filename_prefix

    def path_for(self, report: RoundReport) -> Path:
        unix_seconds = int(report.started_at.timestamp())
        return self.output_dir / report_filename(
            self.filename_prefix, unix_seconds, report.round_number
        )

    def write_round(self, report: RoundReport) -> Path:
        """Write the report, replacing any file of the same name.

        Raises:
            ReportingError: the directory or file could not be written, or a
                row could not be encoded.
        """
        path = self.path_for(report)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with path.open("w", newline="", encoding="utf-8") as handle:
                csv.writer(handle).writerows(format_report_rows(report))
        except (OSError, csv.Error, UnicodeError) as exc:
            raise ReportingError(f"could not write report {path}: {exc}") from exc

        logger.debug("round_report_written", path=str(path), rows=len(report.rows))
        return path
