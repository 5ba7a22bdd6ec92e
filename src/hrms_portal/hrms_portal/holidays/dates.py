"""Date normalisation for spreadsheet imports.

Uploaded sheets carry dates in whatever shape the author's spreadsheet app
produced: Excel serial numbers, real datetime cells, or strings in several
orders and separators. ``normalize_date`` tries, in order:

1. native date/datetime cells
2. Excel serial numbers
3. ISO-like strings (year first)
4. US month-first strings
5. European day-first strings (slash/dash, then dot-separated)
6. day/month/year permutation guessing over common separators
7. month-name strings through pandas

and rejects the value only when every attempt fails. Year-first forms are
always tried before the locale guesses so a valid ISO date is never
transposed.
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pandas as pd

from ..core.constants import EXCEL_UNIX_EPOCH_SERIAL, MAX_IMPORT_YEAR, MIN_IMPORT_YEAR
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

EXCEL_EPOCH = date(1970, 1, 1) - timedelta(days=EXCEL_UNIX_EPOCH_SERIAL)

_ISO_FORMATS = [
    (re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"), "%Y-%m-%d"),
    (re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}"), "%Y-%m-%d"),
    (re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$"), "%Y/%m/%d"),
    (re.compile(r"^\d{4}\.\d{1,2}\.\d{1,2}$"), "%Y.%m.%d"),
]

_US_FORMATS = [
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"), "%m/%d/%Y"),
    (re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$"), "%m-%d-%Y"),
]

_EUROPEAN_FORMATS = [
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"), "%d/%m/%Y"),
    (re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$"), "%d-%m-%Y"),
    (re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$"), "%d.%m.%Y"),
]

_SEPARATORS = ["-", "/", ".", " "]


def _in_window(d: date) -> bool:
    return MIN_IMPORT_YEAR < d.year < MAX_IMPORT_YEAR


def _try_formats(value: str, formats) -> Optional[date]:
    for pattern, fmt in formats:
        if not pattern.match(value):
            continue
        # Timestamps: keep the date part only.
        text = value[:10] if "T" in value else value
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _try_permutations(value: str) -> Optional[date]:
    for sep in _SEPARATORS:
        parts = [p.strip() for p in value.split(sep)]
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            continue
        for y, m, d in ((parts[0], parts[1], parts[2]), (parts[2], parts[0], parts[1]), (parts[2], parts[1], parts[0])):
            try:
                candidate = date(int(y), int(m), int(d))
            except ValueError:
                continue
            if _in_window(candidate):
                return candidate
    return None


def _try_free_form(value: str) -> Optional[date]:
    # Only month-name forms ("Aug 15, 2024"); all-numeric strings stop at the
    # permutation step so day and month are never swapped here.
    if not re.search(r"[A-Za-z]{3}", value):
        return None
    try:
        parsed = pd.to_datetime(value, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    candidate = parsed.date()
    return candidate if _in_window(candidate) else None


def excel_serial_to_date(serial: float) -> date:
    """Excel serial day number -> date (serial 25569 is 1970-01-01)."""
    try:
        return EXCEL_EPOCH + timedelta(days=math.floor(float(serial)))
    except (OverflowError, ValueError) as e:
        raise ValidationError(f"Invalid date format: {serial}. Please use YYYY-MM-DD format.") from e


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if value is pd.NaT:
        return True
    return isinstance(value, str) and not value.strip()


def normalize_date(value: Any) -> str:
    """Return ``value`` as ``YYYY-MM-DD``; "" for empty input.

    Raises ValidationError when no rule recognises the value.
    """
    if is_blank(value):
        return ""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return excel_serial_to_date(value).isoformat()

    if isinstance(value, str):
        text = value.strip()
        for attempt in (
            lambda: _try_formats(text, _ISO_FORMATS),
            lambda: _try_formats(text, _US_FORMATS),
            lambda: _try_formats(text, _EUROPEAN_FORMATS),
            lambda: _try_permutations(text),
            lambda: _try_free_form(text),
        ):
            parsed = attempt()
            if parsed is not None:
                return parsed.isoformat()

    logger.warning("Could not parse date: %r", value)
    raise ValidationError(f"Invalid date format: {value}. Please use YYYY-MM-DD format.")


def parse_boolean(value: Any) -> bool:
    """Spreadsheet "Is Active" cell -> bool. Empty cells default to active."""
    if is_blank(value):
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"yes", "true", "1", "active"}
    if isinstance(value, numbers.Real):
        return value != 0
    return bool(value)
