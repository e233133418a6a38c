"""Per-call and per-worker outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """What a remote operation returns for one round trip."""

    value: T | None
    duration_ns: int
    succeeded: bool
    error: str | None = None

    @classmethod
    def ok(cls, value: T, duration_ns: int) -> CallResult[T]:
        return cls(value=value, duration_ns=duration_ns, succeeded=True)

    @classmethod
    def failed(cls, error: str, duration_ns: int = 0) -> CallResult[T]:
        return cls(value=None, duration_ns=duration_ns, succeeded=False, error=error)


class OperationOutcome(BaseModel, Generic[T]):
    """The recorded result of one worker, addressed by its slot in the batch."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    slot_index: int = Field(ge=0)
    value: Any = None
    duration_ns: int = Field(default=0, ge=0)
    succeeded: bool
    error: str | None = None

    @model_validator(mode="after")
    def validate_value_presence(self) -> OperationOutcome[T]:
        """A value is present exactly when the call succeeded."""
        if self.succeeded and self.value is None:
            msg = "a succeeded outcome must carry a value"
            raise ValueError(msg)
        if not self.succeeded and self.value is not None:
            msg = "a failed outcome must not carry a value"
            raise ValueError(msg)
        return self

    @classmethod
    def from_call(cls, slot_index: int, result: CallResult[Any]) -> OperationOutcome[Any]:
        """Attach a slot index to the result of a remote call."""
        return cls(
            slot_index=slot_index,
            value=result.value if result.succeeded else None,
            duration_ns=max(result.duration_ns, 0),
            succeeded=result.succeeded,
            error=result.error,
        )

    @classmethod
    def failure(cls, slot_index: int, error: str, duration_ns: int = 0) -> OperationOutcome[Any]:
        """Explicit failure marker for a slot whose worker never reported."""
        return cls(slot_index=slot_index, duration_ns=duration_ns, succeeded=False, error=error)
