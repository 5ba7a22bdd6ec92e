from datetime import date, datetime

import pytest

from src.hrms_portal.hrms_portal.core.exceptions import ValidationError
from src.hrms_portal.hrms_portal.holidays.dates import excel_serial_to_date, normalize_date, parse_boolean


def test_day_first_string_is_not_transposed():
    assert normalize_date("15/08/2024") == "2024-08-15"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-08-15", "2024-08-15"),
        ("2024-8-5", "2024-08-05"),
        ("2024-08-15T10:30:00", "2024-08-15"),
        ("2024/08/15", "2024-08-15"),
        ("2024.08.15", "2024-08-15"),
        ("08/15/2024", "2024-08-15"),
        ("08-15-2024", "2024-08-15"),
        ("15-08-2024", "2024-08-15"),
        ("15.08.2024", "2024-08-15"),
        ("2024 08 15", "2024-08-15"),
        ("Aug 15, 2024", "2024-08-15"),
        ("  2024-01-01  ", "2024-01-01"),
    ],
)
def test_string_formats(value, expected):
    assert normalize_date(value) == expected


def test_ambiguous_slash_date_reads_month_first():
    assert normalize_date("05/08/2024") == "2024-05-08"


def test_native_cells():
    assert normalize_date(datetime(2024, 12, 25, 0, 0)) == "2024-12-25"
    assert normalize_date(date(2024, 12, 25)) == "2024-12-25"


def test_excel_serials():
    assert excel_serial_to_date(25569) == date(1970, 1, 1)
    assert normalize_date(45292) == "2024-01-01"
    assert normalize_date(45292.75) == "2024-01-01"


@pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
def test_blank_is_empty(value):
    assert normalize_date(value) == ""


@pytest.mark.parametrize("value", ["not a date", "32/13/2024", "2024-13-45", "1/2"])
def test_invalid_dates_raise(value):
    with pytest.raises(ValidationError) as exc:
        normalize_date(value)
    assert "Please use YYYY-MM-DD format" in str(exc.value)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ("Yes", True),
        ("true", True),
        ("1", True),
        ("Active", True),
        ("No", False),
        ("false", False),
        (0, False),
        (1, True),
        (True, True),
        (False, False),
    ],
)
def test_parse_boolean(value, expected):
    assert parse_boolean(value) is expected
