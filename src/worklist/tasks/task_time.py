# src/worklist/tasks/task_time.py

"""
Instant helpers.

The service speaks ISO-8601 instants. Users type local wall-clock time with
minute precision. Everything in between is an aware datetime.
"""

from __future__ import annotations

from datetime import UTC, datetime

INPUT_FORMAT = "%Y-%m-%dT%H:%M"
DISPLAY_FORMAT = "%d %b %Y, %H:%M"


def now_utc() -> datetime:
    return datetime.now(UTC)


def parse_instant(raw: str) -> datetime:
    """
    Parse an ISO-8601 string into an aware datetime.

    A value without an offset is local wall-clock time.
    Raises ValueError on garbage.
    """
    dt = datetime.fromisoformat(raw.strip())
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def to_wire_instant(dt: datetime) -> str:
    """UTC, millisecond precision, `Z` suffix: 2026-10-17T12:30:00.000Z"""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_local_input(raw: str) -> str:
    """Service instant -> local minute-precision form value."""
    return parse_instant(raw).astimezone().strftime(INPUT_FORMAT)


def format_local(raw: str) -> str:
    return parse_instant(raw).astimezone().strftime(DISPLAY_FORMAT)
