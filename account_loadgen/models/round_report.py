"""Report model for one measurement round."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Sequence

    from account_loadgen.models.account import Account
    from account_loadgen.models.batch_result import BatchResult


def _utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


class ReportRow(BaseModel):
    """One account's balance for a round; ``balance`` is None when the lookup failed."""

    model_config = ConfigDict(frozen=True)

    username: str
    balance: float | None = None


class RoundReport(BaseModel):
    """Everything the report writer needs to persist a round."""

    model_config = ConfigDict(frozen=True)

    round_number: int = Field(ge=1)
    token_name: str = ""
    started_at: datetime = Field(default_factory=_utc_now)
    rows: list[ReportRow] = Field(default_factory=list)
    wall_clock_ns: int = Field(default=0, ge=0)
    summed_ns: int = Field(default=0, ge=0)
    failure_count: int = Field(default=0, ge=0)

    @classmethod
    def from_batch(
        cls,
        round_number: int,
        accounts: Sequence[Account],
        batch: BatchResult,
        token_name: str = "",
        started_at: datetime | None = None,
    ) -> RoundReport:
        """Pair every outcome with the account at the same slot index."""
        if len(accounts) != batch.batch_size:
            msg = f"batch has {batch.batch_size} slots for {len(accounts)} accounts"
            raise ValueError(msg)
        rows = [
            ReportRow(
                username=accounts[outcome.slot_index].username,
                balance=outcome.value if outcome.succeeded else None,
            )
            for outcome in batch.results
        ]
        return cls(
            round_number=round_number,
            token_name=token_name,
            started_at=started_at or _utc_now(),
            rows=rows,
            wall_clock_ns=batch.wall_clock_ns,
            summed_ns=batch.summed_ns,
            failure_count=batch.failure_count,
        )

    @property
    def missing_usernames(self) -> list[str]:
        return [row.username for row in self.rows if row.balance is None]
