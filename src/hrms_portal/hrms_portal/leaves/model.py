from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import safe_parse_date
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Đơn xin nghỉ phép."""

    id: int
    start_date: Optional[date]
    end_date: Optional[date]
    reason: str
    status: LeaveStatus
    user_name: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "LeaveRequest":
        try:
            status = LeaveStatus(str(payload.get("status") or "pending").lower())
        except ValueError:
            status = LeaveStatus.PENDING
        user = payload.get("user") if isinstance(payload.get("user"), dict) else {}
        return cls(
            id=int(payload.get("id") or 0),
            start_date=safe_parse_date(payload.get("start_date")),
            end_date=safe_parse_date(payload.get("end_date")),
            reason=str(payload.get("reason") or ""),
            status=status,
            user_name=user.get("name") or payload.get("user_name"),
        )
