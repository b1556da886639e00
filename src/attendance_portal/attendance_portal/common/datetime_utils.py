from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def normalize_day(value: Optional[str]) -> Optional[str]:
    """Return the canonical YYYY-MM-DD text for a day, or None if it does not parse.

    Attendance dates are stored as text, so range queries only order correctly
    when every stored value uses the same zero-padded layout.
    """

    if not value:
        return None
    try:
        return parse_iso_date(str(value).strip()).isoformat()
    except ValueError:
        return None


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def format_timestamp(value: Any) -> Optional[str]:
    """Render a DATETIME/TIMESTAMP column for JSON output."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
