"""Account model for registered synthetic users."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Account(BaseModel):
    """A registered account and the credential used to query it.

    Created once during bootstrap and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str
    access_token: str
    email: str = ""

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        """Username must be non-empty."""
        if not value.strip():
            msg = "username must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("access_token")
    @classmethod
    def validate_access_token(cls, value: str) -> str:
        """Access token must be non-empty."""
        if not value.strip():
            msg = "access_token must not be empty"
            raise ValueError(msg)
        return value
