from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import safe_parse_date


@dataclass(frozen=True)
class HolidayRow:
    """Một dòng ngày lễ đọc từ / ghi ra file Excel."""

    title: str
    date: str
    description: Optional[str] = None
    is_active: bool = True

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "date": self.date, "is_active": self.is_active}
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class Holiday:
    id: int
    title: str
    date: Optional[date]
    description: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_api(cls, payload: dict) -> "Holiday":
        return cls(
            id=int(payload.get("id") or 0),
            title=str(payload.get("title") or payload.get("name") or ""),
            date=safe_parse_date(payload.get("date")),
            description=payload.get("description") or None,
            is_active=bool(payload.get("is_active", True)),
        )

    def to_row(self) -> HolidayRow:
        return HolidayRow(
            title=self.title,
            date=self.date.isoformat() if self.date else "",
            description=self.description,
            is_active=self.is_active,
        )
