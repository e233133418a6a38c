"""Fan-out/fan-in execution of one remote operation over a fixed input batch."""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Any

from account_loadgen.core.durations import format_duration
from account_loadgen.models.batch_result import BatchResult
from account_loadgen.models.outcome import OperationOutcome
from account_loadgen.utils.logger import get_logger
from account_loadgen.utils.progress import ProgressTracker

if TYPE_CHECKING:
    import threading
    from collections.abc import Sequence

    from account_loadgen.services.protocols import RemoteOperation

logger = get_logger(__name__)

CANCELLED = "cancelled"
DEADLINE_EXCEEDED = "deadline exceeded"


class BatchExecutor:
    """Run one operation per input in parallel and collect outcomes by slot.

    Each input ``i`` owns slot ``i`` of a pre-sized result list. Outcomes are
    committed by the joining thread as futures complete, and the aggregates
    are reduced over the finished slots in ascending order after the join, so
    workers never write shared state.
    """

    def __init__(
        self,
        max_workers: int = 50,
        deadline_seconds: float | None = None,
        progress_every: int = 50,
    ) -> None:
        if max_workers < 1:
            msg = "max_workers must be >= 1"
            raise ValueError(msg)
        self.max_workers = max_workers
        self.deadline_seconds = deadline_seconds
        self.progress_every = progress_every

    def execute_batch(
        self,
        inputs: Sequence[Any],
        operation: RemoteOperation[Any, Any],
        cancel_event: threading.Event | None = None,
    ) -> BatchResult[Any]:
        """Dispatch ``operation`` over ``inputs`` and block until every slot is filled.

        Slots whose worker did not finish before the deadline are marked
        failed; workers that had not started when ``cancel_event`` was set
        are marked cancelled without calling the operation.
        """
        batch_size = len(inputs)
        label = getattr(operation, "name", type(operation).__name__)
        if batch_size == 0:
            return BatchResult.from_outcomes([], wall_clock_ns=0)

        slots: list[OperationOutcome[Any] | None] = [None] * batch_size
        tracker = ProgressTracker(total=batch_size, label=label)
        timed_out = False

        started = time.perf_counter_ns()
        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, batch_size),
            thread_name_prefix=f"{label}-worker",
        )
        try:
            futures: dict[Future[OperationOutcome[Any]], int] = {
                executor.submit(self._run_worker, index, item, operation, cancel_event): index
                for index, item in enumerate(inputs)
            }
            try:
                for future in as_completed(futures, timeout=self.deadline_seconds):
                    index = futures[future]
                    outcome = future.result()
                    slots[index] = outcome
                    if outcome.succeeded:
                        tracker.record_success()
                    else:
                        tracker.record_failure(f"slot {index}: {outcome.error}")
                    tracker.log_progress(every_n=self.progress_every)
            except TimeoutError:
                timed_out = True
                logger.warning(
                    "batch_deadline_exceeded",
                    label=label,
                    deadline_seconds=self.deadline_seconds,
                    batch_size=batch_size,
                    **tracker.summary(),
                )
        finally:
            executor.shutdown(wait=not timed_out, cancel_futures=True)
        wall_clock_ns = time.perf_counter_ns() - started

        outcomes = [
            outcome if outcome is not None else OperationOutcome.failure(index, DEADLINE_EXCEEDED)
            for index, outcome in enumerate(slots)
        ]
        result = BatchResult.from_outcomes(outcomes, wall_clock_ns=wall_clock_ns)

        logger.info(
            "batch_completed",
            label=label,
            batch_size=batch_size,
            succeeded=result.success_count,
            failed=result.failure_count,
            wall_clock=format_duration(result.wall_clock_ns),
            summed=format_duration(result.summed_ns),
        )
        return result

    @staticmethod
    def _run_worker(
        slot_index: int,
        item: Any,
        operation: RemoteOperation[Any, Any],
        cancel_event: threading.Event | None,
    ) -> OperationOutcome[Any]:
        if cancel_event is not None and cancel_event.is_set():
            return OperationOutcome.failure(slot_index, CANCELLED)
        try:
            return OperationOutcome.from_call(slot_index, operation(item))
        except Exception as exc:
            # Operations report failures through CallResult; a raise or a
            # malformed result is a bug in the operation and only costs this slot.
            logger.error(
                "remote_operation_raised",
                slot_index=slot_index,
                error=f"{type(exc).__name__}: {exc}",
            )
            return OperationOutcome.failure(slot_index, f"{type(exc).__name__}: {exc}")
