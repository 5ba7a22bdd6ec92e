from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .excel import parse_holiday_workbook
from .model import Holiday, HolidayRow
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list(self) -> list[Holiday]:
        return [Holiday.from_api(h) for h in self._holidays.list() if isinstance(h, dict)]

    def upcoming(self, *, today: date) -> list[Holiday]:
        items = [h for h in self.list() if h.date and h.date >= today]
        items.sort(key=lambda h: h.date)
        return items

    def past(self, *, today: date) -> list[Holiday]:
        items = [h for h in self.list() if h.date and h.date < today]
        items.sort(key=lambda h: h.date, reverse=True)
        return items

    def search(self, term: str) -> list[Holiday]:
        needle = (term or "").strip().lower()
        items = self.list()
        if not needle:
            return items
        return [
            h
            for h in items
            if needle in h.title.lower() or (h.description and needle in h.description.lower())
        ]

    def add(
        self,
        *,
        title: str,
        date_value: str,
        today: date,
        description: Optional[str] = None,
        is_active: bool = True,
    ) -> Any:
        title = require_non_empty(title, "Holiday title")
        if not (date_value or "").strip():
            raise ValidationError("Holiday date is required")
        try:
            day = parse_iso_date(date_value.strip())
        except ValueError:
            raise ValidationError("Holiday date must be in YYYY-MM-DD format")
        if day < today:
            raise ValidationError("Holiday date cannot be in the past")

        row = HolidayRow(
            title=title,
            date=day.isoformat(),
            description=(description or "").strip() or None,
            is_active=bool(is_active),
        )
        return self._holidays.add(row.to_payload())

    def delete(self, holiday_id: int) -> Any:
        return self._holidays.delete(int(holiday_id))

    def bulk_upload(self, *, filename: str, content: bytes) -> list[HolidayRow]:
        """Validate the workbook locally, then hand the file to the backend."""
        if not content:
            raise ValidationError("Please choose a file to upload")

        rows = parse_holiday_workbook(content)
        if not rows:
            raise ValidationError("No holidays found in the uploaded file")

        self._holidays.bulk_upload(filename=filename, content=content)
        logger.info("Uploaded %d holidays from %s", len(rows), filename)
        return rows

    def export_rows(self) -> list[HolidayRow]:
        return [h.to_row() for h in self.list()]
