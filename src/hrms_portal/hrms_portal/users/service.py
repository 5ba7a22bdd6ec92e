from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_email, require_non_empty, require_password
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, AuthorizationError, NetworkError, ValidationError
from .model import SessionUser, User, parse_role
from .repository import AuthRepository, UserRepository

logger = logging.getLogger(__name__)

ADMIN_ROLES = {Role.ADMIN, Role.SUPER_ADMIN}

ROLE_LABELS = {
    Role.SUPER_ADMIN: "Super Admin",
    Role.ADMIN: "Admin",
    Role.USER: "User",
}


def dashboard_for(role: Optional[Role]) -> str:
    """Landing page per role."""
    if role in ADMIN_ROLES:
        return "/admin/dashboard"
    return "/dashboard"


class AuthService:
    """Use case: authenticate user (login) against the backend."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def login(self, email: str, password: str) -> SessionUser:
        email = require_email(email)
        require_password(password)

        try:
            payload = self._auth.login(email=email, password=password)
        except NetworkError:
            raise
        except ApiError as e:
            if e.status in {400, 401, 403, 422}:
                raise AuthenticationError(e.message if e.status != 401 else "Invalid email or password") from e
            raise

        token = payload.get("access_token")
        user = payload.get("user") if isinstance(payload.get("user"), dict) else {}
        if not token or not user.get("id"):
            raise AuthenticationError("Login failed")

        logger.info("User %s logged in", user.get("id"))
        return SessionUser(
            user_id=int(user["id"]),
            name=str(user.get("name") or ""),
            email=str(user.get("email") or email),
            role=parse_role(user.get("role")),
            token=str(token),
            user=dict(user),
        )

    def profile(self) -> User:
        return User.from_api(self._auth.get_profile())

    def update_profile(self, *, name: str, phone: Optional[str] = None) -> Any:
        name = require_non_empty(name, "Name")
        return self._auth.update_profile(name=name, phone=(phone or "").strip() or None)


class UserAdminService:
    """Use case: user administration screen (list, activate/deactivate, promote)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(
        self,
        *,
        current_role: Role,
        search: str = "",
        role_filter: str = "all",
        status_filter: str = "all",
    ) -> list[User]:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("You do not have permission to manage users")

        needle = (search or "").strip().lower()
        out = []
        for u in (User.from_api(r) for r in self._users.list_users() if isinstance(r, dict)):
            if needle and needle not in u.name.lower() and needle not in u.email.lower():
                continue
            if role_filter != "all" and u.role.value != role_filter:
                continue
            if status_filter == "active" and not u.is_active:
                continue
            if status_filter == "inactive" and u.is_active:
                continue
            out.append(u)
        return out

    def toggle_status(self, *, current_role: Role, user_id: int) -> Any:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("You do not have permission to manage users")
        return self._users.toggle_status(int(user_id))

    def promote(self, *, current_role: Role, user_id: int) -> Any:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can promote users")

        user = next(
            (u for u in (User.from_api(r) for r in self._users.list_users() if isinstance(r, dict)) if u.id == int(user_id)),
            None,
        )
        if not user:
            raise ValidationError("User not found")
        if user.role != Role.USER:
            raise ValidationError("Only regular users can be promoted to admin")
        return self._users.promote(user.id)

    def dashboard(self, *, current_role: Role) -> Optional[dict]:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("You do not have permission to view the admin dashboard")
        return self._users.dashboard()

    @staticmethod
    def to_ui(u: User) -> dict:
        return {
            "id": u.id,
            "name": u.name,
            "email": u.email,
            "role": ROLE_LABELS.get(u.role, "User"),
            "status": "Active" if u.is_active else "Inactive",
        }
