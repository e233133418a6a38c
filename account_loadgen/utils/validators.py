"""URL and address validation utilities."""

from __future__ import annotations

import re
from urllib.parse import urlparse

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_url(url: str) -> bool:
    """Check if a string is a valid HTTP/HTTPS URL."""
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except ValueError:
        return False


def normalize_base_url(url: str) -> str:
    """Strip surrounding whitespace and trailing slashes from a service base URL."""
    return url.strip().rstrip("/")


def is_valid_email(address: str) -> bool:
    """Loose syntactic check: one '@' and a dotted domain."""
    return bool(_EMAIL_PATTERN.match(address))
