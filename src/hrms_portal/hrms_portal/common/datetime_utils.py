from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import EMPTY_DATE, EMPTY_DURATION, EMPTY_TIME


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def safe_parse_iso(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp coming from the API; None for anything unusable.

    Aware timestamps are converted to naive local time so they can be compared
    with ``now_local()``.
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not value or not isinstance(value, str) or value in {"null", "undefined"}:
        return None
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        return to_local_naive(datetime.fromisoformat(v))
    except ValueError:
        return None


def safe_parse_date(value: Any) -> Optional[date]:
    """Calendar date of an API field; None for anything unusable.

    The date part is read as written, before any timezone shift, so
    "2024-08-15T00:00:00Z" stays 2024-08-15 on every host.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return parse_iso_date(value.strip()[:10])
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_time(value: Any, fmt: str = "%H:%M") -> str:
    parsed = safe_parse_iso(value)
    return parsed.strftime(fmt) if parsed else EMPTY_TIME


def format_date(value: Any, fmt: str = "%b %d, %Y") -> str:
    parsed = safe_parse_iso(value)
    return parsed.strftime(fmt) if parsed else EMPTY_DATE


def format_clock(total_seconds: float) -> str:
    """Seconds -> HH:MM:SS. Negative input is clamped to zero."""
    total_seconds = max(int(total_seconds), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hours(hours: Optional[float]) -> str:
    """Decimal hours from the backend -> "Xh Ym"."""
    if not hours:
        return EMPTY_DURATION
    h = int(hours)
    m = int((hours - h) * 60)
    return f"{h}h {m}m"
