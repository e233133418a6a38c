"""Wire model for the balance endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class BalanceResponse(BaseModel):
    """Envelope returned by ``GET /api/user/balance``; ``data`` is the balance."""

    model_config = ConfigDict(extra="ignore")

    data: float
    status: str = ""
    message: str = ""
    fields: Any = None
