"""Time helpers for opening hours and analytics windows."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def parse_hhmm(value: str) -> str:
    """Validate an ``HH:MM`` string and return it zero-padded.

    Raises:
        ValueError: when the value is not a valid 24h clock time.
    """
    parsed: datetime = datetime.strptime(str(value).strip(), "%H:%M")
    return f"{parsed.hour:02d}:{parsed.minute:02d}"


def today_window_utc() -> tuple[datetime, datetime]:
    """Return today's UTC window boundaries.

    Events are stored with UTC timestamps, so all "today" filtering must use UTC
    boundaries as well.
    """
    now = datetime.now(timezone.utc)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    return start, end


def rolling_window_start(days: int) -> datetime:
    """Return the UTC start of a rolling window covering ``days`` days."""
    return datetime.now(timezone.utc) - timedelta(days=days)
