"""Service protocols defining interfaces for dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from pathlib import Path

    from account_loadgen.models.balance import BalanceResponse
    from account_loadgen.models.outcome import CallResult
    from account_loadgen.models.registration import (
        RegistrationRequest,
        RegistrationResponse,
    )
    from account_loadgen.models.round_report import RoundReport

InputT_contra = TypeVar("InputT_contra", contravariant=True)
OutputT_co = TypeVar("OutputT_co", covariant=True)


class RemoteOperation(Protocol[InputT_contra, OutputT_co]):
    """One blocking network round trip per call.

    Implementations report transport and decode failures through
    ``CallResult.succeeded`` instead of raising, and keep no mutable state
    shared between calls.
    """

    def __call__(self, item: InputT_contra) -> CallResult[OutputT_co]: ...


class AccountServiceProtocol(Protocol):
    """Protocol for the account service HTTP client."""

    def register(self, request: RegistrationRequest) -> tuple[RegistrationResponse, int]: ...

    def get_balance(self, access_token: str, token_name: str) -> tuple[BalanceResponse, int]: ...


class ReportWriterProtocol(Protocol):
    """Protocol for persisting one measurement round."""

    def write_round(self, report: RoundReport) -> Path: ...
