from __future__ import annotations

from datetime import date
from typing import Any

from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

ADMIN_ROLES = {Role.ADMIN, Role.SUPER_ADMIN}

STATUS_CSS = {
    LeaveStatus.APPROVED: "bg-green-100 text-green-800",
    LeaveStatus.REJECTED: "bg-red-100 text-red-800",
    LeaveStatus.PENDING: "bg-yellow-100 text-yellow-800",
}


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def apply(self, *, start_date: date, end_date: date, reason: str) -> Any:
        if end_date < start_date:
            raise ValidationError("End date must be on or after the start date")

        reason = require_non_empty(reason, "Reason")
        # Backend expects timezone-naive datetimes covering whole days.
        return self._leaves.apply(
            {
                "start_date": f"{start_date.isoformat()}T00:00:00",
                "end_date": f"{end_date.isoformat()}T23:59:59",
                "reason": reason,
            }
        )

    def my_leaves(self) -> list[LeaveRequest]:
        return [LeaveRequest.from_api(r) for r in self._leaves.my_leaves() if isinstance(r, dict)]

    def all_leaves(self, *, current_role: Role) -> list[LeaveRequest]:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("You do not have permission to view all leaves")
        return [LeaveRequest.from_api(r) for r in self._leaves.all_leaves() if isinstance(r, dict)]

    def pending(self, *, current_role: Role) -> list[LeaveRequest]:
        return [r for r in self.all_leaves(current_role=current_role) if r.status == LeaveStatus.PENDING]

    def decide(self, *, current_role: Role, leave_id: int, status: LeaveStatus) -> Any:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("You do not have permission to review leaves")

        if status == LeaveStatus.APPROVED:
            return self._leaves.approve(int(leave_id))
        if status == LeaveStatus.REJECTED:
            return self._leaves.reject(int(leave_id))
        raise ValidationError("Leave can only be approved or rejected")

    def reports(self, *, current_role: Role) -> Any:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("You do not have permission to view reports")
        return self._leaves.reports()

    @staticmethod
    def to_ui(r: LeaveRequest) -> dict:
        return {
            "id": r.id,
            "start_date": r.start_date.isoformat() if r.start_date else "-",
            "end_date": r.end_date.isoformat() if r.end_date else "-",
            "reason": r.reason,
            "status": r.status.value,
            "css_class": STATUS_CSS.get(r.status, STATUS_CSS[LeaveStatus.PENDING]),
            "user_name": r.user_name or "-",
        }
