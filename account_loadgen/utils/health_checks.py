"""Account service reachability checks."""

from __future__ import annotations

import requests

from account_loadgen.utils.logger import get_logger
from account_loadgen.utils.retry import retry_with_logging

logger = get_logger(__name__)


def check_service_health(base_url: str, timeout: float = 10.0) -> bool:
    """Check if the account service answers HTTP requests at all.

    Any response below 500 counts as reachable; the root path of the
    service is not required to exist.
    """
    try:
        response = requests.get(base_url, timeout=timeout)
        return response.status_code < 500
    except requests.RequestException as exc:
        logger.warning("service_health_check_failed", base_url=base_url, error=str(exc))
        return False


def wait_for_service(
    base_url: str,
    max_attempts: int = 5,
    timeout: float = 10.0,
    min_wait: float = 2.0,
    max_wait: float = 10.0,
) -> bool:
    """Block until the service is reachable or the attempts run out."""

    @retry_with_logging(max_attempts=max_attempts, min_wait=min_wait, max_wait=max_wait)
    def _probe() -> None:
        response = requests.get(base_url, timeout=timeout)
        if response.status_code >= 500:
            raise ConnectionError(f"service unhealthy: HTTP {response.status_code}")

    try:
        _probe()
    except OSError as exc:
        logger.error(
            "service_unreachable",
            base_url=base_url,
            attempts=max(1, max_attempts),
            error=str(exc),
        )
        return False

    logger.info("service_reachable", base_url=base_url)
    return True
