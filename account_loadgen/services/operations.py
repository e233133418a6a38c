"""Remote operations dispatched by the batch executor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from account_loadgen.models.account import Account
from account_loadgen.models.outcome import CallResult
from account_loadgen.services.errors import RemoteCallError

if TYPE_CHECKING:
    from account_loadgen.models.registration import RegistrationRequest
    from account_loadgen.services.protocols import AccountServiceProtocol

logger = structlog.get_logger(__name__)


class RegisterAccountOperation:
    """Register one synthetic account."""

    name = "register_account"

    def __init__(self, client: AccountServiceProtocol) -> None:
        self.client = client

    def __call__(self, request: RegistrationRequest) -> CallResult[Account]:
        try:
            response, duration_ns = self.client.register(request)
        except RemoteCallError as exc:
            logger.warning("registration_failed", username=request.username, error=str(exc))
            return CallResult.failed(str(exc), exc.duration_ns)

        user = response.data
        if user is None or not user.access_token.strip():
            error = f"registration rejected: {response.message or 'no access token in response'}"
            logger.warning("registration_failed", username=request.username, error=error)
            return CallResult.failed(error, duration_ns)

        account = Account(
            username=user.username or request.username,
            access_token=user.access_token,
            email=user.email or request.email,
        )
        return CallResult.ok(account, duration_ns)


class BalanceLookupOperation:
    """Look up one account's balance of a single token."""

    name = "balance_lookup"

    def __init__(self, client: AccountServiceProtocol, token_name: str) -> None:
        self.client = client
        self.token_name = token_name

    def __call__(self, account: Account) -> CallResult[float]:
        try:
            response, duration_ns = self.client.get_balance(account.access_token, self.token_name)
        except RemoteCallError as exc:
            logger.warning(
                "balance_lookup_failed",
                username=account.username,
                token=self.token_name,
                error=str(exc),
            )
            return CallResult.failed(str(exc), exc.duration_ns)
        return CallResult.ok(response.data, duration_ns)
