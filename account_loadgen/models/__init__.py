"""Pydantic data models for the account load generator."""

from account_loadgen.models.account import Account
from account_loadgen.models.balance import BalanceResponse
from account_loadgen.models.batch_result import BatchResult
from account_loadgen.models.config import Config
from account_loadgen.models.outcome import CallResult, OperationOutcome
from account_loadgen.models.registration import (
    RegisteredUser,
    RegistrationRequest,
    RegistrationResponse,
)
from account_loadgen.models.round_report import ReportRow, RoundReport

__all__ = [
    "Account",
    "BalanceResponse",
    "BatchResult",
    "CallResult",
    "Config",
    "OperationOutcome",
    "RegisteredUser",
    "RegistrationRequest",
    "RegistrationResponse",
    "ReportRow",
    "RoundReport",
]
