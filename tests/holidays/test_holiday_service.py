from datetime import date
from io import BytesIO

import pytest
from openpyxl import Workbook

from src.hrms_portal.hrms_portal.core.exceptions import ValidationError
from src.hrms_portal.hrms_portal.holidays.excel import HEADERS
from src.hrms_portal.hrms_portal.holidays.service import HolidayService


class InMemoryHolidays:
    def __init__(self, items=None):
        self.items = list(items or [])
        self.added = []
        self.deleted = []
        self.uploads = []

    def list(self):
        return list(self.items)

    def add(self, payload):
        self.added.append(payload)
        return {"id": len(self.items) + 1, **payload}

    def delete(self, holiday_id):
        self.deleted.append(holiday_id)

    def bulk_upload(self, *, filename, content):
        self.uploads.append((filename, content))
        return {"message": "ok"}


TODAY = date(2025, 6, 1)

ITEMS = [
    {"id": 1, "title": "New Year", "date": "2025-01-01", "description": "Start of year"},
    {"id": 2, "name": "Labour Day", "date": "2025-05-01T00:00:00"},
    {"id": 3, "title": "Independence Day", "date": "2025-08-15", "description": "National holiday"},
    {"id": 4, "title": "Christmas", "date": "2025-12-25", "is_active": False},
]


def test_upcoming_and_past_split_on_today():
    svc = HolidayService(InMemoryHolidays(ITEMS))

    assert [h.title for h in svc.upcoming(today=TODAY)] == ["Independence Day", "Christmas"]
    assert [h.title for h in svc.past(today=TODAY)] == ["Labour Day", "New Year"]


def test_search_matches_title_and_description():
    svc = HolidayService(InMemoryHolidays(ITEMS))

    assert [h.id for h in svc.search("national")] == [3]
    assert [h.id for h in svc.search("labour")] == [2]
    assert len(svc.search("")) == 4


def test_add_sends_payload():
    repo = InMemoryHolidays()
    svc = HolidayService(repo)

    svc.add(title=" Founders Day ", date_value="2025-07-01", description=" ", today=TODAY)

    assert repo.added == [{"title": "Founders Day", "date": "2025-07-01", "is_active": True}]


@pytest.mark.parametrize(
    "title, date_value, message",
    [
        ("", "2025-07-01", "Holiday title is required"),
        ("Day", "", "Holiday date is required"),
        ("Day", "07/01/2025", "Holiday date must be in YYYY-MM-DD format"),
        ("Day", "2025-05-31", "Holiday date cannot be in the past"),
    ],
)
def test_add_validation(title, date_value, message):
    repo = InMemoryHolidays()
    svc = HolidayService(repo)

    with pytest.raises(ValidationError) as exc:
        svc.add(title=title, date_value=date_value, today=TODAY)

    assert str(exc.value) == message
    assert repo.added == []


def test_add_today_is_allowed():
    repo = InMemoryHolidays()
    HolidayService(repo).add(title="Today", date_value="2025-06-01", today=TODAY)
    assert len(repo.added) == 1


def _workbook(rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(HEADERS)
    for row in rows:
        ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_bulk_upload_validates_before_forwarding():
    repo = InMemoryHolidays()
    svc = HolidayService(repo)
    content = _workbook([["Day", "31/12/2025", "", "Yes"]])

    rows = svc.bulk_upload(filename="holidays.xlsx", content=content)

    assert [r.date for r in rows] == ["2025-12-31"]
    assert repo.uploads == [("holidays.xlsx", content)]


def test_bulk_upload_bad_row_is_not_forwarded():
    repo = InMemoryHolidays()
    svc = HolidayService(repo)

    with pytest.raises(ValidationError):
        svc.bulk_upload(filename="h.xlsx", content=_workbook([["Day", "tomorrow-ish", "", "Yes"]]))

    assert repo.uploads == []


def test_bulk_upload_empty_file_or_sheet():
    svc = HolidayService(InMemoryHolidays())

    with pytest.raises(ValidationError):
        svc.bulk_upload(filename="h.xlsx", content=b"")
    with pytest.raises(ValidationError) as exc:
        svc.bulk_upload(filename="h.xlsx", content=_workbook([]))
    assert str(exc.value) == "No holidays found in the uploaded file"


def test_export_rows():
    svc = HolidayService(InMemoryHolidays(ITEMS))

    rows = svc.export_rows()

    assert rows[1].title == "Labour Day"
    assert rows[1].date == "2025-05-01"
    assert rows[3].is_active is False
