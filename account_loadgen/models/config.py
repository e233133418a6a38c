"""Application configuration model using pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from account_loadgen.utils.validators import is_valid_email, is_valid_url, normalize_base_url


class Config(BaseSettings):
    """Load generator settings from ``LOADGEN_*`` environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="LOADGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = "http://localhost:8080"
    account_count: int = 500
    token_name: str = "gas"
    round_interval_seconds: float = 5.0
    max_rounds: int = 0
    max_concurrency: int = 100
    request_timeout_seconds: float = 30.0
    round_deadline_seconds: float = 120.0
    report_dir: str = "reports"
    log_level: str = "INFO"
    log_format: str = "console"
    max_retry_attempts: int = 5

    password: str = "Un1x_Generated"
    avatar_id: int = 1
    verification_code: str = "12345"
    referral_code: str = ""
    username_prefix: str = "unix"
    email_domain: str = "gmail.com"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Base URL must be an http(s) URL; trailing slashes are dropped."""
        normalized = normalize_base_url(value)
        if not is_valid_url(normalized):
            msg = "base_url must be an http:// or https:// URL"
            raise ValueError(msg)
        return normalized

    @field_validator("account_count", "max_rounds")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        """Counts must not be negative."""
        if value < 0:
            msg = "value must be >= 0"
            raise ValueError(msg)
        return value

    @field_validator("token_name")
    @classmethod
    def validate_token_name(cls, value: str) -> str:
        """Token name must be non-empty."""
        if not value.strip():
            msg = "token_name must not be empty"
            raise ValueError(msg)
        return value.strip()

    @field_validator("round_interval_seconds", "round_deadline_seconds")
    @classmethod
    def validate_non_negative_seconds(cls, value: float) -> float:
        """Intervals and deadlines must not be negative; a zero deadline disables it."""
        if value < 0:
            msg = "value must be >= 0"
            raise ValueError(msg)
        return value

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_request_timeout(cls, value: float) -> float:
        """Request timeout must be positive."""
        if value <= 0:
            msg = "request_timeout_seconds must be > 0"
            raise ValueError(msg)
        return value

    @field_validator("max_concurrency")
    @classmethod
    def validate_max_concurrency(cls, value: int) -> int:
        """Concurrency must be between 1 and 10000."""
        if value < 1 or value > 10000:
            msg = "max_concurrency must be between 1 and 10000"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            msg = f"log_level must be one of {', '.join(sorted(valid_levels))}"
            raise ValueError(msg)
        return upper_value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        """Log format must be console or json."""
        lower_value = value.lower()
        if lower_value not in {"console", "json"}:
            msg = "log_format must be one of console, json"
            raise ValueError(msg)
        return lower_value

    @field_validator("email_domain")
    @classmethod
    def validate_email_domain(cls, value: str) -> str:
        """Generated addresses on this domain must look like email addresses."""
        domain = value.strip().lstrip("@")
        if not is_valid_email(f"user@{domain}"):
            msg = "email_domain must be a dotted domain such as example.com"
            raise ValueError(msg)
        return domain

    @field_validator("max_retry_attempts")
    @classmethod
    def validate_max_retry_attempts(cls, value: int) -> int:
        """Max retry attempts must be between 0 and 10."""
        if value < 0 or value > 10:
            msg = "max_retry_attempts must be between 0 and 10"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def validate_timeout_within_deadline(self) -> Config:
        """A request must time out before the round deadline it runs under.

        Workers left behind by a missed deadline then finish within one
        request timeout instead of piling up across rounds.
        """
        if self.round_deadline_seconds and self.request_timeout_seconds > self.round_deadline_seconds:
            msg = (
                "request_timeout_seconds must not exceed round_deadline_seconds "
                "while the round deadline is enabled"
            )
            raise ValueError(msg)
        return self

    @property
    def batch_deadline_seconds(self) -> float | None:
        """Deadline handed to the batch executor, None when disabled."""
        return self.round_deadline_seconds or None
