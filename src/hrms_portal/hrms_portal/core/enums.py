from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class TimerState(str, Enum):
    """Trạng thái đồng hồ chấm công phía client."""

    NOT_CHECKED_IN = "NOT_CHECKED_IN"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    CHECKED_OUT = "CHECKED_OUT"


class LeaveStatus(str, Enum):
    """Trạng thái luồng duyệt đơn nghỉ phép (giá trị theo API)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
