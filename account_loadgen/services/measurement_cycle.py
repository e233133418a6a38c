"""Repeated balance polling rounds over the registered accounts."""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from account_loadgen.core.durations import format_duration
from account_loadgen.models.round_report import RoundReport
from account_loadgen.services.errors import ReportingError
from account_loadgen.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from account_loadgen.models.account import Account
    from account_loadgen.models.batch_result import BatchResult
    from account_loadgen.services.batch_executor import BatchExecutor
    from account_loadgen.services.protocols import RemoteOperation, ReportWriterProtocol

logger = get_logger(__name__)


class MeasurementCycle:
    """Run balance rounds back to back, reporting each before starting the next.

    ``stop_event`` ends the loop after the round in flight has been reported
    and interrupts the pause between rounds. ``abort_event`` is handed to the
    executor so workers of the current round that have not started yet are
    skipped.
    """

    def __init__(
        self,
        executor: BatchExecutor,
        operation: RemoteOperation[Account, float],
        report_writer: ReportWriterProtocol,
        interval_seconds: float = 5.0,
        *,
        token_name: str = "",
        stop_event: threading.Event | None = None,
        abort_event: threading.Event | None = None,
    ) -> None:
        self.executor = executor
        self.operation = operation
        self.report_writer = report_writer
        self.interval_seconds = max(interval_seconds, 0.0)
        self.token_name = token_name
        self.stop_event = stop_event or threading.Event()
        self.abort_event = abort_event

    def run_round(self, accounts: Sequence[Account], round_number: int) -> BatchResult:
        """Execute one balance batch and hand its report to the writer.

        A writer failure of any kind is logged and costs only this round's
        report; the batch result is returned either way.
        """
        started_at = datetime.now(UTC)
        batch = self.executor.execute_batch(accounts, self.operation, cancel_event=self.abort_event)

        report = RoundReport.from_batch(
            round_number,
            accounts,
            batch,
            token_name=self.token_name,
            started_at=started_at,
        )
        if batch.failure_count:
            logger.warning(
                "balances_missing",
                round_number=round_number,
                missing=batch.failure_count,
                total=batch.batch_size,
                usernames=report.missing_usernames[:10],
            )

        try:
            path = self.report_writer.write_round(report)
        except ReportingError as exc:
            logger.error("round_report_failed", round_number=round_number, error=str(exc))
        except Exception as exc:
            logger.error(
                "round_report_failed",
                round_number=round_number,
                error=f"{type(exc).__name__}: {exc}",
                exc_info=True,
            )
        else:
            logger.info(
                "round_completed",
                round_number=round_number,
                accounts=batch.batch_size,
                failed=batch.failure_count,
                wall_clock=format_duration(batch.wall_clock_ns),
                summed=format_duration(batch.summed_ns),
                report=str(path),
            )
        return batch

    def run(self, accounts: Sequence[Account], max_rounds: int | None = None) -> int:
        """Run rounds until stopped or ``max_rounds`` is reached; return rounds completed.

        ``max_rounds=None`` runs until ``stop_event`` is set.
        """
        completed = 0
        logger.info(
            "measurement_started",
            accounts=len(accounts),
            interval_seconds=self.interval_seconds,
            max_rounds=max_rounds,
        )
        while not self.stop_event.is_set():
            if max_rounds is not None and completed >= max_rounds:
                break
            self.run_round(accounts, completed + 1)
            completed += 1
            if max_rounds is not None and completed >= max_rounds:
                break
            if self.stop_event.wait(timeout=self.interval_seconds):
                break

        logger.info("measurement_stopped", rounds=completed)
        return completed
