from __future__ import annotations

from datetime import date

from flask import Flask, request, send_file

from ..common.web import admin_required, current_user_id, error_response, fail, login_required, ok
from ..container import Container
from ..core.exceptions import DomainError
from .excel import XLSX_MIMETYPE, export_holidays, holiday_template
from .model import Holiday


def _to_ui(h: Holiday) -> dict:
    return {
        "id": h.id,
        "title": h.title,
        "date": h.date.isoformat() if h.date else "-",
        "description": h.description or "",
        "is_active": h.is_active,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/holidays", methods=["GET"], endpoint="holidays")
    @login_required
    def holidays_view():
        svc = container.holiday_service(current_user_id())
        today = date.today()
        term = request.args.get("q", "")
        try:
            if term:
                return ok(holidays=[_to_ui(h) for h in svc.search(term)])
            return ok(
                upcoming=[_to_ui(h) for h in svc.upcoming(today=today)],
                past=[_to_ui(h) for h in svc.past(today=today)],
            )
        except DomainError as e:
            return error_response(e, "Failed to fetch holidays")

    @app.route("/admin/holidays", methods=["POST"], endpoint="admin_holiday_add")
    @admin_required
    def admin_holiday_add():
        data = request.get_json(silent=True) or request.form
        svc = container.holiday_service(current_user_id())
        try:
            svc.add(
                title=str(data.get("title") or ""),
                date_value=str(data.get("date") or ""),
                description=str(data.get("description") or ""),
                is_active=data.get("is_active", True) not in {False, "false", "0", "no"},
                today=date.today(),
            )
        except DomainError as e:
            return error_response(e, "Failed to create holiday")
        return ok("Holiday added successfully", http_status=201)

    @app.route("/admin/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="admin_holiday_delete")
    @admin_required
    def admin_holiday_delete(holiday_id: int):
        svc = container.holiday_service(current_user_id())
        try:
            svc.delete(holiday_id)
        except DomainError as e:
            return error_response(e, "Failed to delete holiday")
        return ok("Holiday deleted successfully")

    @app.route("/admin/holidays/import", methods=["POST"], endpoint="admin_holiday_import")
    @admin_required
    def admin_holiday_import():
        if "file" not in request.files:
            return fail("Please choose a file to upload")

        upload = request.files["file"]
        svc = container.holiday_service(current_user_id())
        try:
            rows = svc.bulk_upload(filename=upload.filename or "holidays.xlsx", content=upload.read())
        except DomainError as e:
            return error_response(e, "Failed to upload holidays")
        return ok("Holidays uploaded successfully", count=len(rows), holidays=[r.to_payload() for r in rows])

    @app.route("/admin/holidays/export", methods=["GET"], endpoint="admin_holiday_export")
    @admin_required
    def admin_holiday_export():
        svc = container.holiday_service(current_user_id())
        try:
            rows = svc.export_rows()
        except DomainError as e:
            return error_response(e, "Failed to export holidays")
        return send_file(
            export_holidays(rows),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="holidays.xlsx",
        )

    @app.route("/admin/holidays/template", methods=["GET"], endpoint="admin_holiday_template")
    @admin_required
    def admin_holiday_template():
        return send_file(
            holiday_template(),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="holidays_template.xlsx",
        )
