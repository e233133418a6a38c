"""Shared test fixtures for the account load generator."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import pytest
import structlog

from account_loadgen.models.account import Account
from account_loadgen.models.balance import BalanceResponse
from account_loadgen.models.outcome import CallResult
from account_loadgen.models.registration import (
    RegisteredUser,
    RegistrationRequest,
    RegistrationResponse,
)
from account_loadgen.services.errors import DecodeError, TransportError


@pytest.fixture(autouse=True, scope="session")
def _structlog_to_stdlib() -> None:
    """Send log events through stdlib logging so they never land on stdout."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class ScriptedOperation:
    """Remote operation double driven by a per-item behaviour function.

    ``behaviour`` returns ``(value, duration_ns, succeeded)``. When
    ``sleep`` is set the call blocks for the scripted duration, so the batch
    sees real overlap between workers.
    """

    name = "scripted"

    def __init__(
        self,
        behaviour: Callable[[Any], tuple[Any, int, bool]],
        sleep: bool = False,
    ) -> None:
        self.behaviour = behaviour
        self.sleep = sleep
        self.calls: list[Any] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def __call__(self, item: Any) -> CallResult[Any]:
        with self._lock:
            self.calls.append(item)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            value, duration_ns, succeeded = self.behaviour(item)
            if self.sleep:
                time.sleep(duration_ns / 1_000_000_000)
        finally:
            with self._lock:
                self.in_flight -= 1
        if succeeded:
            return CallResult.ok(value, duration_ns)
        return CallResult.failed(f"scripted failure for {item!r}", duration_ns)


class FakeAccountClient:
    """In-memory account service.

    Registration of a username in ``failing_registrations`` raises a
    TransportError; a balance lookup for a username in ``failing_balances``
    raises a DecodeError. Every call takes ``duration_ns``.
    """

    def __init__(
        self,
        balance: float = 42.5,
        failing_registrations: frozenset[str] = frozenset(),
        failing_balances: frozenset[str] = frozenset(),
        duration_ns: int = 1_000_000,
    ) -> None:
        self.balance = balance
        self.failing_registrations = failing_registrations
        self.failing_balances = failing_balances
        self.duration_ns = duration_ns
        self.register_calls: list[RegistrationRequest] = []
        self.balance_calls: list[tuple[str, str]] = []
        self.closed = False
        self._lock = threading.Lock()

    def register(self, request: RegistrationRequest) -> tuple[RegistrationResponse, int]:
        with self._lock:
            self.register_calls.append(request)
        if request.username in self.failing_registrations:
            raise TransportError("connection refused", duration_ns=self.duration_ns)
        response = RegistrationResponse(
            data=RegisteredUser(
                access_token=f"token-{request.username}",
                username=request.username,
                email=request.email,
            ),
            status="success",
        )
        return response, self.duration_ns

    def get_balance(self, access_token: str, token_name: str) -> tuple[BalanceResponse, int]:
        with self._lock:
            self.balance_calls.append((access_token, token_name))
        username = access_token.removeprefix("token-")
        if username in self.failing_balances:
            raise DecodeError("unexpected BalanceResponse body", duration_ns=self.duration_ns)
        return BalanceResponse(data=self.balance, status="success"), self.duration_ns

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted_operation() -> type[ScriptedOperation]:
    """The ScriptedOperation class, for building per-test doubles."""
    return ScriptedOperation


@pytest.fixture
def fake_client_factory() -> type[FakeAccountClient]:
    """The FakeAccountClient class, for per-test configuration."""
    return FakeAccountClient


@pytest.fixture
def fake_client() -> FakeAccountClient:
    """A fake account service where every call succeeds."""
    return FakeAccountClient()


@pytest.fixture
def make_accounts() -> Callable[[int], list[Account]]:
    """Factory building ``n`` accounts named user0..user{n-1}."""

    def _make(count: int) -> list[Account]:
        return [
            Account(
                username=f"user{index}",
                access_token=f"token-user{index}",
                email=f"user{index}@example.com",
            )
            for index in range(count)
        ]

    return _make


@pytest.fixture
def registration_payload() -> dict[str, Any]:
    """A registration response body as the service sends it."""
    return {
        "data": {
            "accessRequestCount": 0,
            "accessToken": "eyJhbGciOi.example.token",
            "username": "unix17000000000",
            "email": "unix17000000000@gmail.com",
            "admin": False,
            "avatar": {"id": 1, "url": "https://cdn.example.com/avatars/1.png"},
            "followerCount": 0,
            "followingCount": 0,
            "info": {},
        },
        "status": "success",
        "message": "User registered",
        "fields": None,
    }
