"""Duration formatting for reports.

Durations are rendered the way the service team's Go tooling prints them
(``850µs``, ``30ms``, ``1.5s``, ``1m30s``) so existing report consumers keep
parsing them.
"""

from __future__ import annotations

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE


def _with_fraction(value: int, unit: int) -> str:
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")


def format_duration(duration_ns: int) -> str:
    """Render an integer nanosecond duration in Go ``time.Duration`` notation."""
    if duration_ns == 0:
        return "0s"
    sign = "-" if duration_ns < 0 else ""
    value = abs(duration_ns)

    if value < MICROSECOND:
        return f"{sign}{value}ns"
    if value < MILLISECOND:
        return f"{sign}{_with_fraction(value, MICROSECOND)}µs"
    if value < SECOND:
        return f"{sign}{_with_fraction(value, MILLISECOND)}ms"

    hours, remainder = divmod(value, HOUR)
    minutes, remainder = divmod(remainder, MINUTE)
    prefix = ""
    if hours:
        prefix += f"{hours}h"
    if hours or minutes:
        prefix += f"{minutes}m"
    return f"{sign}{prefix}{_with_fraction(remainder, SECOND)}s"


def nanoseconds_to_seconds(duration_ns: int) -> float:
    return duration_ns / SECOND
