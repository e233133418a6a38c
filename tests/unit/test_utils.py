"""Unit tests for utility modules."""

from __future__ import annotations

import pytest

from account_loadgen.utils.progress import ProgressTracker
from account_loadgen.utils.retry import retry_with_logging
from account_loadgen.utils.validators import is_valid_email, is_valid_url, normalize_base_url

# ──────────────────────────────────────────────────────────────────────
# utils/validators.py
# ──────────────────────────────────────────────────────────────────────


class TestIsValidUrl:
    def test_http(self) -> None:
        assert is_valid_url("http://localhost:8080") is True

    def test_https_with_path(self) -> None:
        assert is_valid_url("https://api.example.com/v1") is True

    def test_missing_scheme(self) -> None:
        assert is_valid_url("localhost:8080") is False

    def test_ftp_scheme(self) -> None:
        assert is_valid_url("ftp://files.example.com") is False

    def test_empty(self) -> None:
        assert is_valid_url("") is False

    def test_invalid_port_does_not_raise(self) -> None:
        assert is_valid_url("http://[::1") is False


class TestNormalizeBaseUrl:
    def test_trailing_slashes(self) -> None:
        assert normalize_base_url(" http://svc:8080// ") == "http://svc:8080"

    def test_already_normal(self) -> None:
        assert normalize_base_url("http://svc") == "http://svc"


class TestIsValidEmail:
    def test_valid(self) -> None:
        assert is_valid_email("unix1700@gmail.com") is True

    def test_missing_domain_dot(self) -> None:
        assert is_valid_email("user@localhost") is False

    def test_missing_at(self) -> None:
        assert is_valid_email("user.example.com") is False


# ──────────────────────────────────────────────────────────────────────
# utils/progress.py
# ──────────────────────────────────────────────────────────────────────


class TestProgressTracker:
    def test_counts(self) -> None:
        tracker = ProgressTracker(total=3)
        tracker.record_success()
        tracker.record_failure("slot 1: refused")
        tracker.record_success()

        assert tracker.processed == 3
        assert tracker.successful == 2
        assert tracker.failed == 1
        assert tracker.errors == ["slot 1: refused"]
        assert tracker.progress_percentage == 100.0

    def test_empty_total_is_complete(self) -> None:
        assert ProgressTracker(total=0).progress_percentage == 100.0

    def test_partial_percentage(self) -> None:
        tracker = ProgressTracker(total=4)
        tracker.record_success()
        assert tracker.progress_percentage == 25.0

    def test_summary(self) -> None:
        tracker = ProgressTracker(total=1, label="balance_lookup")
        tracker.record_failure("boom")
        summary = tracker.summary()
        assert summary["processed"] == 1
        assert summary["failed"] == 1
        assert summary["errors"] == ["boom"]
        assert isinstance(summary["duration_seconds"], float)

    def test_log_progress_does_not_raise(self) -> None:
        tracker = ProgressTracker(total=2)
        tracker.record_success()
        tracker.log_progress(every_n=1)


# ──────────────────────────────────────────────────────────────────────
# utils/retry.py
# ──────────────────────────────────────────────────────────────────────


class TestRetryWithLogging:
    def test_retries_connection_errors_until_success(self) -> None:
        calls: list[int] = []

        @retry_with_logging(max_attempts=3, min_wait=0, max_wait=0)
        def flaky() -> str:
            calls.append(1)
            if len(calls) < 3:
                raise ConnectionError("refused")
            return "ok"

        assert flaky() == "ok"
        assert len(calls) == 3

    def test_reraises_after_last_attempt(self) -> None:
        calls: list[int] = []

        @retry_with_logging(max_attempts=2, min_wait=0, max_wait=0)
        def down() -> None:
            calls.append(1)
            raise TimeoutError("timed out")

        with pytest.raises(TimeoutError):
            down()
        assert len(calls) == 2

    def test_other_errors_not_retried(self) -> None:
        calls: list[int] = []

        @retry_with_logging(max_attempts=5, min_wait=0, max_wait=0)
        def broken() -> None:
            calls.append(1)
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            broken()
        assert len(calls) == 1

    def test_zero_attempts_still_calls_once(self) -> None:
        calls: list[int] = []

        @retry_with_logging(max_attempts=0, min_wait=0, max_wait=0)
        def once() -> str:
            calls.append(1)
            return "done"

        assert once() == "done"
        assert len(calls) == 1
