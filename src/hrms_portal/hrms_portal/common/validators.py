from __future__ import annotations

import re

from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_email(value: str) -> str:
    value = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(value):
        raise ValidationError("Please enter a valid email address")
    return value


def require_password(value: str) -> str:
    return require_min_length(value, "Password", MIN_PASSWORD_LENGTH)
