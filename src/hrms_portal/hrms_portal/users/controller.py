from __future__ import annotations

import logging
from datetime import date

from flask import Flask, request, session

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    error_response,
    fail,
    login_required,
    ok,
    super_admin_required,
)
from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError
from ..leaves.service import LeaveService
from .service import UserAdminService, dashboard_for

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def bind_auth_session():
        # Rebuild the in-memory token holder from the cookie session (worker restarts).
        if "user_id" in session:
            container.sessions.bind(session["user_id"], session.get("token"), session.get("user"))

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        try:
            s_user = container.auth_service().login(str(data.get("email") or ""), str(data.get("password") or ""))
        except AuthenticationError as e:
            return fail(str(e), 401)
        except DomainError as e:
            return error_response(e, "Login failed")

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["token"] = s_user.token
        session["user"] = s_user.user
        container.sessions.bind(s_user.user_id, s_user.token, s_user.user)

        return ok(
            "Login successful",
            user={"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value},
            redirect=dashboard_for(s_user.role),
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        user_id = session.get("user_id")
        session.clear()
        if user_id is not None:
            container.trackers.discard(user_id)
            container.sessions.drop(user_id)
        return ok("Logged out")

    @app.route("/me", methods=["GET"], endpoint="profile")
    @login_required
    def profile():
        try:
            user = container.auth_service(current_user_id()).profile()
        except DomainError as e:
            return error_response(e, "Failed to load profile")
        return ok(user={"id": user.id, "name": user.name, "email": user.email, "phone": user.phone, "role": user.role.value})

    @app.route("/me", methods=["PUT"], endpoint="profile_update")
    @login_required
    def profile_update():
        data = request.get_json(silent=True) or request.form
        try:
            container.auth_service(current_user_id()).update_profile(
                name=str(data.get("name") or ""),
                phone=str(data.get("phone") or ""),
            )
        except DomainError as e:
            return error_response(e, "Failed to update profile")
        session["name"] = str(data.get("name") or "").strip()
        return ok("Profile updated successfully")

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        user_id = current_user_id()
        tracker = container.tracker(user_id)
        today = date.today()

        # Each panel degrades to empty on failure, the page itself never fails.
        try:
            leaves = [LeaveService.to_ui(r) for r in container.leave_service(user_id).my_leaves()]
        except DomainError:
            logger.debug("Dashboard: leaves unavailable", exc_info=True)
            leaves = []
        try:
            holidays = [
                {"title": h.title, "date": h.date.isoformat()}
                for h in container.holiday_service(user_id).upcoming(today=today)
            ]
        except DomainError:
            logger.debug("Dashboard: holidays unavailable", exc_info=True)
            holidays = []

        return ok(name=session.get("name"), status=tracker.snapshot(), leaves=leaves, upcoming_holidays=holidays)

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        try:
            stats = container.user_admin_service(current_user_id()).dashboard(current_role=current_role())
        except DomainError:
            logger.debug("Admin dashboard: stats unavailable", exc_info=True)
            stats = None
        return ok(name=session.get("name"), stats=stats)

    @app.route("/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        svc = container.user_admin_service(current_user_id())
        try:
            users = svc.list_users(
                current_role=current_role(),
                search=request.args.get("q", ""),
                role_filter=request.args.get("role", "all"),
                status_filter=request.args.get("status", "all"),
            )
        except DomainError as e:
            return error_response(e, "Failed to fetch users")
        return ok(users=[UserAdminService.to_ui(u) for u in users])

    @app.route("/admin/users/<int:user_id>/toggle-status", methods=["POST"], endpoint="admin_user_toggle")
    @admin_required
    def admin_user_toggle(user_id: int):
        svc = container.user_admin_service(current_user_id())
        try:
            svc.toggle_status(current_role=current_role(), user_id=user_id)
        except DomainError as e:
            return error_response(e, "Failed to update user status")
        return ok("User status updated successfully")

    @app.route("/admin/users/<int:user_id>/promote", methods=["POST"], endpoint="admin_user_promote")
    @super_admin_required
    def admin_user_promote(user_id: int):
        svc = container.user_admin_service(current_user_id())
        try:
            svc.promote(current_role=current_role(), user_id=user_id)
        except DomainError as e:
            return error_response(e, "Failed to promote user")
        return ok("User promoted to admin successfully")
