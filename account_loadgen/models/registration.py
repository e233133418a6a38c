"""Wire models for the registration endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RegistrationRequest(BaseModel):
    """Body of ``POST /api/auth/register``."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    email: str
    username: str
    password: str
    avatar_id: int = 1
    verification_code: str = ""
    referral_code: str = ""

    def to_payload(self) -> dict[str, Any]:
        """JSON body with the camelCase keys the service expects."""
        return self.model_dump(by_alias=True)


class RegisteredUser(BaseModel):
    """The ``data`` object of a registration response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    access_token: str = ""
    username: str = ""
    email: str = ""
    admin: bool = False
    avatar: dict[str, Any] | None = None
    follower_count: int = 0
    following_count: int = 0
    info: dict[str, Any] | None = None
    access_request_count: int = 0


class RegistrationResponse(BaseModel):
    """Envelope returned by the registration endpoint."""

    model_config = ConfigDict(extra="ignore")

    data: RegisteredUser | None = None
    status: str = ""
    message: str = ""
    fields: Any = None
