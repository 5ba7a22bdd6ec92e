from __future__ import annotations

import logging
from io import BytesIO
from typing import Iterable, Union

import pandas as pd

from ..core.exceptions import ValidationError
from .dates import is_blank, normalize_date, parse_boolean
from .model import HolidayRow

logger = logging.getLogger(__name__)

HEADERS = ["Title", "Date", "Description", "Is Active"]
COLUMN_WIDTHS = {"A": 20, "B": 15, "C": 30, "D": 10}
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TEMPLATE_ROWS = [
    HolidayRow(title="New Year's Day", date="2024-01-01", description="New Year celebration"),
    HolidayRow(title="Independence Day", date="2024-08-15", description="National holiday"),
    HolidayRow(title="Diwali", date="2024-11-01", description="Festival of lights"),
]


def _cell(row: list, index: int):
    return row[index] if index < len(row) else None


def _text(value) -> str:
    return "" if is_blank(value) else str(value).strip()


def parse_holiday_workbook(source: Union[bytes, BytesIO]) -> list[HolidayRow]:
    """Read the first sheet of an uploaded workbook into HolidayRow items.

    The first row is the header. Rows without a title or a date are skipped;
    any other bad row fails the whole import with its spreadsheet row number.
    """
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)

    try:
        frame = pd.read_excel(source, sheet_name=0, header=None, dtype=object, engine="openpyxl")
    except Exception as e:
        logger.warning("Excel parsing error: %s", e)
        raise ValidationError(f"Failed to parse Excel file: {e}") from e

    rows = frame.values.tolist()
    holidays: list[HolidayRow] = []
    for index, row in enumerate(rows[1:], start=2):
        title = _text(_cell(row, 0))
        raw_date = _cell(row, 1)
        if not title or is_blank(raw_date):
            continue

        try:
            holidays.append(
                HolidayRow(
                    title=title,
                    date=normalize_date(raw_date),
                    description=_text(_cell(row, 2)) or None,
                    is_active=parse_boolean(_cell(row, 3)),
                )
            )
        except ValidationError as e:
            raise ValidationError(f"Row {index}: {e}") from e

    logger.info("Parsed %d holiday rows", len(holidays))
    return holidays


def _write_workbook(rows: Iterable[HolidayRow], sheet_name: str) -> BytesIO:
    frame = pd.DataFrame(
        [[r.title, r.date, r.description or "", "Yes" if r.is_active else "No"] for r in rows],
        columns=HEADERS,
    )

    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name=sheet_name)
        sheet = writer.sheets[sheet_name]
        for column, width in COLUMN_WIDTHS.items():
            sheet.column_dimensions[column].width = width

    buffer.seek(0)
    return buffer


def export_holidays(rows: Iterable[HolidayRow]) -> BytesIO:
    return _write_workbook(rows, "Holidays")


def holiday_template() -> BytesIO:
    return _write_workbook(TEMPLATE_ROWS, "Holidays Template")
