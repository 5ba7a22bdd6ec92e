from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_role, current_user_id, error_response, fail, login_required, ok
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import DomainError
from .service import LeaveService


def register(app: Flask, container: Container) -> None:
    @app.route("/leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        svc = container.leave_service(current_user_id())
        try:
            return ok(leaves=[LeaveService.to_ui(r) for r in svc.my_leaves()])
        except DomainError as e:
            return error_response(e, "Failed to fetch leaves")

    @app.route("/leaves", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        data = request.get_json(silent=True) or request.form
        try:
            start = parse_iso_date(data.get("start_date") or "")
            end = parse_iso_date(data.get("end_date") or "")
        except (TypeError, ValueError):
            return fail("Dates must be in YYYY-MM-DD format")

        svc = container.leave_service(current_user_id())
        try:
            svc.apply(start_date=start, end_date=end, reason=str(data.get("reason") or ""))
        except DomainError as e:
            return error_response(e, "Failed to submit leave application")
        return ok("Leave application submitted successfully!", http_status=201)

    @app.route("/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        svc = container.leave_service(current_user_id())
        only_pending = request.args.get("status") == LeaveStatus.PENDING.value
        try:
            items = svc.pending(current_role=current_role()) if only_pending else svc.all_leaves(current_role=current_role())
        except DomainError as e:
            return error_response(e, "Failed to fetch leaves")
        return ok(leaves=[LeaveService.to_ui(r) for r in items])

    @app.route("/admin/leaves/<int:leave_id>/<action>", methods=["POST"], endpoint="admin_leave_decide")
    @admin_required
    def admin_leave_decide(leave_id: int, action: str):
        status = {"approve": LeaveStatus.APPROVED, "reject": LeaveStatus.REJECTED}.get(action)
        if status is None:
            return fail("Unknown action", 404)

        svc = container.leave_service(current_user_id())
        try:
            svc.decide(current_role=current_role(), leave_id=leave_id, status=status)
        except DomainError as e:
            return error_response(e, f"Failed to {action} leave")
        return ok(f"Leave {status.value} successfully")

    @app.route("/admin/reports/leaves", methods=["GET"], endpoint="admin_leave_reports")
    @admin_required
    def admin_leave_reports():
        svc = container.leave_service(current_user_id())
        try:
            return ok(report=svc.reports(current_role=current_role()))
        except DomainError as e:
            return error_response(e, "Failed to load reports")
