from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import safe_parse_date, safe_parse_iso
from ..core.enums import TimerState


def _hours(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class AttendanceDay:
    """Bản ghi chấm công của ngày hôm nay (today-status từ backend)."""

    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    total_hours: Optional[float] = None

    @classmethod
    def from_api(cls, payload: Optional[dict]) -> "AttendanceDay":
        payload = payload or {}
        return cls(
            check_in_time=safe_parse_iso(payload.get("check_in_time")),
            check_out_time=safe_parse_iso(payload.get("check_out_time")),
            total_hours=_hours(payload.get("total_hours")),
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Một dòng lịch sử chấm công."""

    id: int
    date: Optional[date]
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    total_hours: Optional[float] = None

    @classmethod
    def from_api(cls, payload: dict) -> "AttendanceRecord":
        return cls(
            id=int(payload.get("id") or 0),
            date=safe_parse_date(payload.get("date")),
            check_in_time=safe_parse_iso(payload.get("check_in_time")),
            check_out_time=safe_parse_iso(payload.get("check_out_time")),
            total_hours=_hours(payload.get("total_hours")),
        )

    @property
    def is_complete(self) -> bool:
        return self.check_out_time is not None


@dataclass(frozen=True)
class BreakInterval:
    """Client-only pause inside a working session. Never sent to the backend."""

    start: datetime
    end: Optional[datetime] = None

    def duration_seconds(self, now: datetime) -> float:
        end = self.end or now
        return max((end - self.start).total_seconds(), 0.0)


@dataclass(frozen=True)
class TimerSnapshot:
    state: TimerState
    worked_seconds: int
    break_seconds: int
    total_break_seconds: int
    work_display: str
    break_display: str

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "worked_seconds": self.worked_seconds,
            "break_seconds": self.break_seconds,
            "total_break_seconds": self.total_break_seconds,
            "work_display": self.work_display,
            "break_display": self.break_display,
        }
