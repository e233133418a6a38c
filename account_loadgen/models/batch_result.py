"""Batch result model for one fan-out/fan-in execution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from account_loadgen.core.durations import nanoseconds_to_seconds
from account_loadgen.models.outcome import OperationOutcome

T = TypeVar("T")


class BatchResult(BaseModel, Generic[T]):
    """Outcomes of a batch in slot order plus its aggregate timings.

    ``wall_clock_ns`` is the elapsed time of the whole batch, from dispatch to
    the join barrier. ``summed_ns`` is the sum of every outcome's own
    duration. The two are unrelated measurements.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    results: list[OperationOutcome] = Field(default_factory=list)
    wall_clock_ns: int = Field(default=0, ge=0)
    summed_ns: int = Field(default=0, ge=0)
    failure_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_aggregates(self) -> BatchResult[T]:
        """Slots must be in index order and the aggregates must match them."""
        for position, outcome in enumerate(self.results):
            if outcome.slot_index != position:
                msg = f"result at position {position} has slot_index {outcome.slot_index}"
                raise ValueError(msg)
        failures = sum(1 for outcome in self.results if not outcome.succeeded)
        if failures != self.failure_count:
            msg = f"failure_count {self.failure_count} does not match {failures} failed outcomes"
            raise ValueError(msg)
        summed = sum(outcome.duration_ns for outcome in self.results)
        if summed != self.summed_ns:
            msg = f"summed_ns {self.summed_ns} does not match outcome durations ({summed})"
            raise ValueError(msg)
        return self

    @classmethod
    def from_outcomes(
        cls,
        outcomes: Sequence[OperationOutcome[Any]],
        wall_clock_ns: int,
    ) -> BatchResult[Any]:
        """Reduce completed outcomes into a result, in ascending slot order."""
        summed_ns = 0
        failure_count = 0
        for outcome in outcomes:
            summed_ns += outcome.duration_ns
            if not outcome.succeeded:
                failure_count += 1
        return cls(
            results=list(outcomes),
            wall_clock_ns=max(wall_clock_ns, 0),
            summed_ns=summed_ns,
            failure_count=failure_count,
        )

    @property
    def batch_size(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return self.batch_size - self.failure_count

    @property
    def is_partial_failure(self) -> bool:
        """True when some, but not all, workers failed."""
        return 0 < self.failure_count < self.batch_size

    @property
    def wall_clock_seconds(self) -> float:
        return nanoseconds_to_seconds(self.wall_clock_ns)

    @property
    def summed_seconds(self) -> float:
        return nanoseconds_to_seconds(self.summed_ns)

    def values(self) -> list[Any]:
        """Values of the succeeded outcomes, in slot order."""
        return [outcome.value for outcome in self.successful()]

    def successful(self) -> list[OperationOutcome[Any]]:
        return [outcome for outcome in self.results if outcome.succeeded]

    def errors(self) -> list[str]:
        return [
            f"slot {outcome.slot_index}: {outcome.error or 'unknown error'}"
            for outcome in self.results
            if not outcome.succeeded
        ]
