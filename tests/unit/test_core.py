"""Unit tests for the pure functions in account_loadgen.core.

No I/O, no mocking required.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from account_loadgen.core.durations import format_duration, nanoseconds_to_seconds
from account_loadgen.core.registration_builder import (
    build_registration_requests,
    registration_key,
)
from account_loadgen.core.report_format import (
    REPORT_HEADER,
    format_balance,
    format_report_rows,
    report_filename,
)
from account_loadgen.models.round_report import ReportRow, RoundReport

# ──────────────────────────────────────────────────────────────────────
# core/durations.py
# ──────────────────────────────────────────────────────────────────────


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("duration_ns", "expected"),
        [
            (0, "0s"),
            (1, "1ns"),
            (999, "999ns"),
            (1_000, "1µs"),
            (850_000, "850µs"),
            (1_500, "1.5µs"),
            (30_000_000, "30ms"),
            (1_234_567, "1.234567ms"),
            (1_000_000_000, "1s"),
            (1_500_000_000, "1.5s"),
            (90_000_000_000, "1m30s"),
            (3_600_000_000_000, "1h0m0s"),
            (5_400_250_000_000, "1h30m0.25s"),
            (-2_000_000, "-2ms"),
        ],
    )
    def test_go_notation(self, duration_ns: int, expected: str) -> None:
        assert format_duration(duration_ns) == expected

    def test_nanoseconds_to_seconds(self) -> None:
        assert nanoseconds_to_seconds(250_000_000) == 0.25


# ──────────────────────────────────────────────────────────────────────
# core/registration_builder.py
# ──────────────────────────────────────────────────────────────────────


class TestRegistrationKey:
    def test_zero_padded(self) -> None:
        assert registration_key("unix", 1700000000, 7, 3) == "unix1700000000007"


class TestBuildRegistrationRequests:
    def test_count(self) -> None:
        assert len(build_registration_requests(12, 1700000000)) == 12

    def test_zero(self) -> None:
        assert build_registration_requests(0, 1700000000) == []

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="count"):
            build_registration_requests(-1, 1700000000)

    def test_usernames_and_emails_unique(self) -> None:
        requests = build_registration_requests(500, 1700000000)
        assert len({r.username for r in requests}) == 500
        assert len({r.email for r in requests}) == 500

    def test_fixed_width_keys(self) -> None:
        requests = build_registration_requests(11, 1700000000)
        assert requests[0].username == "unix170000000000"
        assert requests[10].username == "unix170000000010"
        assert len({len(r.username) for r in requests}) == 1

    def test_email_derived_from_username(self) -> None:
        request = build_registration_requests(1, 42, email_domain="example.org")[0]
        assert request.email == f"{request.username}@example.org"

    def test_registration_defaults_applied(self) -> None:
        request = build_registration_requests(
            1,
            42,
            username_prefix="load",
            password="Secret_1",
            avatar_id=3,
            verification_code="00000",
            referral_code="REF",
        )[0]
        assert request.username == "load420"
        assert request.password == "Secret_1"
        assert request.avatar_id == 3
        assert request.verification_code == "00000"
        assert request.referral_code == "REF"


# ──────────────────────────────────────────────────────────────────────
# core/report_format.py
# ──────────────────────────────────────────────────────────────────────


class TestReportFormat:
    def test_format_balance(self) -> None:
        assert format_balance(12.5) == "12.500000"
        assert format_balance(0.0) == "0.000000"
        assert format_balance(None) == ""

    def test_report_filename(self) -> None:
        assert report_filename("log", 1700000000, 3) == "log_1700000000_0003.csv"

    def test_rows(self) -> None:
        report = RoundReport(
            round_number=1,
            started_at=datetime(2024, 1, 1, tzinfo=UTC),
            rows=[ReportRow(username="a", balance=1.0), ReportRow(username="b")],
            wall_clock_ns=30_000_000,
            summed_ns=60_000_000,
            failure_count=1,
        )

        rows = format_report_rows(report)

        assert rows[0] == REPORT_HEADER
        assert rows[1] == ["a", "1.000000", "30ms", "60ms"]
        assert rows[2] == ["b", "", "30ms", "60ms"]

    def test_header_only_for_empty_round(self) -> None:
        assert format_report_rows(RoundReport(round_number=1)) == [REPORT_HEADER]
