"""Error types for remote calls and report persistence."""

from __future__ import annotations


class RemoteCallError(Exception):
    """A single round trip to the account service failed.

    ``duration_ns`` is the time spent before the failure was detected.
    """

    def __init__(
        self,
        message: str,
        duration_ns: int = 0,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.duration_ns = duration_ns
        self.status_code = status_code


class TransportError(RemoteCallError):
    """Connection failure, timeout, or a non-2xx HTTP status."""


class DecodeError(RemoteCallError):
    """The response body was not the JSON document the endpoint promises."""


class ReportingError(Exception):
    """A round report could not be persisted."""
