"""Builders for synthetic registration inputs."""

from __future__ import annotations

from account_loadgen.models.registration import RegistrationRequest


def registration_key(prefix: str, run_stamp: int, index: int, width: int) -> str:
    """Unique key for slot ``index`` of a bootstrap run.

    The zero-padded index keeps keys of one run distinct and equally long.
    """
    return f"{prefix}{run_stamp}{index:0{width}d}"


def build_registration_requests(
    count: int,
    run_stamp: int,
    *,
    username_prefix: str = "unix",
    email_domain: str = "gmail.com",
    password: str = "Un1x_Generated",
    avatar_id: int = 1,
    verification_code: str = "12345",
    referral_code: str = "",
) -> list[RegistrationRequest]:
    """Build ``count`` registration requests with distinct usernames and emails."""
    if count < 0:
        msg = "count must be >= 0"
        raise ValueError(msg)

    width = len(str(max(count - 1, 0)))
    requests: list[RegistrationRequest] = []
    for index in range(count):
        key = registration_key(username_prefix, run_stamp, index, width)
        requests.append(
            RegistrationRequest(
                email=f"{key}@{email_domain}",
                username=key,
                password=password,
                avatar_id=avatar_id,
                verification_code=verification_code,
                referral_code=referral_code,
            )
        )
    return requests
