from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_user_id, error_response, fail, login_required, ok
from ..container import Container
from ..core.exceptions import DomainError, SessionExpiredError
from .http_tracking_repository import HttpTrackingRepository


def register(app: Flask, container: Container) -> None:
    def _state_payload(tracker) -> dict:
        return {"status": tracker.snapshot(), "history": tracker.history_ui()}

    def _failed(e: DomainError, fallback: str):
        if isinstance(e, SessionExpiredError):
            container.trackers.discard(current_user_id())
        return error_response(e, fallback)

    @app.route("/tracker", methods=["GET"], endpoint="tracker")
    @login_required
    def tracker_view():
        # Page (re)load: rebuild from the backend, not from the cached cell.
        tracker = container.tracker(current_user_id())
        try:
            tracker.load()
        except DomainError as e:
            return _failed(e, "Failed to load attendance")
        return ok(**_state_payload(tracker))

    @app.route("/tracker/status", methods=["GET"], endpoint="tracker_status")
    @login_required
    def tracker_status():
        # Polled every second by the widget; no backend round trip.
        tracker = container.tracker(current_user_id())
        return ok(status=tracker.snapshot())

    @app.route("/tracker/check-in", methods=["POST"], endpoint="tracker_check_in")
    @login_required
    def tracker_check_in():
        tracker = container.tracker(current_user_id())
        try:
            tracker.check_in()
        except DomainError as e:
            return _failed(e, "Failed to check in")
        return ok("Checked in successfully!", **_state_payload(tracker))

    @app.route("/tracker/check-out", methods=["POST"], endpoint="tracker_check_out")
    @login_required
    def tracker_check_out():
        tracker = container.tracker(current_user_id())
        try:
            tracker.check_out()
        except DomainError as e:
            return _failed(e, "Failed to check out")
        return ok("Checked out successfully!", **_state_payload(tracker))

    @app.route("/tracker/break/start", methods=["POST"], endpoint="tracker_break_start")
    @login_required
    def tracker_break_start():
        tracker = container.tracker(current_user_id())
        try:
            tracker.start_break()
        except DomainError as e:
            return _failed(e, "Failed to start break")
        return ok("Break started", status=tracker.snapshot())

    @app.route("/tracker/break/end", methods=["POST"], endpoint="tracker_break_end")
    @login_required
    def tracker_break_end():
        tracker = container.tracker(current_user_id())
        try:
            tracker.end_break()
        except DomainError as e:
            return _failed(e, "Failed to end break")
        return ok("Break ended", status=tracker.snapshot())

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        repo = HttpTrackingRepository(container.client_for(current_user_id()))
        user_id = request.args.get("user_id", type=int)
        date_s = request.args.get("date")
        try:
            work_date = parse_iso_date(date_s) if date_s else None
        except ValueError:
            return fail("Date must be in YYYY-MM-DD format")

        try:
            rows = repo.attendance_by_user(user_id, work_date) if user_id else repo.all_attendance()
        except DomainError as e:
            return error_response(e, "Failed to load attendance")
        return ok(records=rows)
