"""One-time registration of the account working set."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from account_loadgen.core.durations import format_duration
from account_loadgen.core.registration_builder import build_registration_requests
from account_loadgen.models.batch_result import BatchResult
from account_loadgen.services.operations import RegisterAccountOperation
from account_loadgen.utils.logger import get_logger

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    from account_loadgen.models.account import Account
    from account_loadgen.services.batch_executor import BatchExecutor
    from account_loadgen.services.protocols import AccountServiceProtocol

logger = get_logger(__name__)


class AccountBootstrapper:
    """Registers ``count`` synthetic accounts in one parallel batch."""

    def __init__(
        self,
        client: AccountServiceProtocol,
        executor: BatchExecutor,
        *,
        username_prefix: str = "unix",
        email_domain: str = "gmail.com",
        password: str = "Un1x_Generated",
        avatar_id: int = 1,
        verification_code: str = "12345",
        referral_code: str = "",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.executor = executor
        self.username_prefix = username_prefix
        self.email_domain = email_domain
        self.password = password
        self.avatar_id = avatar_id
        self.verification_code = verification_code
        self.referral_code = referral_code
        self._clock = clock
        self.last_result: BatchResult | None = None

    def bootstrap(
        self,
        count: int,
        cancel_event: threading.Event | None = None,
    ) -> list[Account]:
        """Register ``count`` accounts and return the ones that succeeded.

        Accounts come back in slot order with failed registrations dropped,
        so list positions do not match the original slot indices. Failed
        registrations are not retried.
        """
        if count < 0:
            msg = "count must be >= 0"
            raise ValueError(msg)
        if count == 0:
            logger.info("bootstrap_skipped", reason="count is 0")
            self.last_result = BatchResult.from_outcomes([], wall_clock_ns=0)
            return []

        requests = build_registration_requests(
            count,
            int(self._clock()),
            username_prefix=self.username_prefix,
            email_domain=self.email_domain,
            password=self.password,
            avatar_id=self.avatar_id,
            verification_code=self.verification_code,
            referral_code=self.referral_code,
        )
        batch = self.executor.execute_batch(
            requests,
            RegisterAccountOperation(self.client),
            cancel_event=cancel_event,
        )
        self.last_result = batch

        accounts: list[Account] = batch.values()
        logger.info(
            "accounts_registered",
            requested=count,
            registered=len(accounts),
            failed=batch.failure_count,
            partial_failure=batch.is_partial_failure,
            wall_clock=format_duration(batch.wall_clock_ns),
            summed=format_duration(batch.summed_ns),
        )
        return accounts
