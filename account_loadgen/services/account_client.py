"""HTTP client for the account service."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, TypeVar

import requests
from pydantic import BaseModel
from requests.adapters import HTTPAdapter

from account_loadgen.models.balance import BalanceResponse
from account_loadgen.models.registration import RegistrationResponse
from account_loadgen.services.errors import DecodeError, TransportError
from account_loadgen.utils.validators import normalize_base_url

if TYPE_CHECKING:
    from account_loadgen.models.registration import RegistrationRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


class AccountServiceClient:
    """Client for the registration and balance endpoints.

    Every call returns the decoded body together with the round-trip time in
    nanoseconds, measured from sending the request until the response headers
    arrive. Body decoding is not part of the measured time.
    """

    REGISTER_PATH = "/api/auth/register"
    BALANCE_PATH = "/api/user/balance"

    def __init__(self, base_url: str, timeout: float = 30.0, pool_size: int = 10) -> None:
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self.session = requests.Session()
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max(pool_size, 1))
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def register(self, request: RegistrationRequest) -> tuple[RegistrationResponse, int]:
        """Register one account.

        Raises:
            TransportError: connection failure, timeout, or non-2xx status.
            DecodeError: the body is not a registration response.
        """
        response, duration_ns = self._send(
            "POST",
            self.REGISTER_PATH,
            json=request.to_payload(),
        )
        return self._decode(response, RegistrationResponse, duration_ns), duration_ns

    def get_balance(self, access_token: str, token_name: str) -> tuple[BalanceResponse, int]:
        """Fetch the balance of ``token_name`` for the account owning ``access_token``."""
        response, duration_ns = self._send(
            "GET",
            self.BALANCE_PATH,
            params={"token": token_name},
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return self._decode(response, BalanceResponse, duration_ns), duration_ns

    def close(self) -> None:
        self.session.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> tuple[requests.Response, int]:
        url = f"{self.base_url}{path}"
        started = time.perf_counter_ns()
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(
                f"{method} {path} failed: {exc}",
                duration_ns=time.perf_counter_ns() - started,
            ) from exc
        duration_ns = time.perf_counter_ns() - started

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                duration_ns=duration_ns,
                status_code=response.status_code,
            )
        return response, duration_ns

    @staticmethod
    def _decode(response: requests.Response, model: type[ModelT], duration_ns: int) -> ModelT:
        # pydantic.ValidationError and JSON decode errors are both ValueErrors
        try:
            return model.model_validate(response.json())
        except ValueError as exc:
            raise DecodeError(
                f"unexpected {model.__name__} body: {exc}",
                duration_ns=duration_ns,
                status_code=response.status_code,
            ) from exc
