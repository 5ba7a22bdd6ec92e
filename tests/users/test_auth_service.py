import pytest

from src.hrms_portal.hrms_portal.core.enums import Role
from src.hrms_portal.hrms_portal.core.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    ValidationError,
)
from src.hrms_portal.hrms_portal.users.service import AuthService, UserAdminService, dashboard_for


class InMemoryAuth:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.updates = []

    def login(self, *, email, password):
        if self.error is not None:
            raise self.error
        return self.response

    def get_profile(self):
        return {"id": 1, "name": "An", "email": "an@example.com", "role": "user", "phone": "0900"}

    def update_profile(self, *, name, phone=None):
        self.updates.append((name, phone))


class InMemoryUsers:
    def __init__(self, users):
        self.users = users
        self.toggled = []
        self.promoted = []

    def list_users(self):
        return list(self.users)

    def toggle_status(self, user_id):
        self.toggled.append(user_id)

    def promote(self, user_id):
        self.promoted.append(user_id)

    def dashboard(self):
        return {"total_users": len(self.users)}


USERS = [
    {"id": 1, "name": "An Nguyen", "email": "an@example.com", "role": "user", "is_active": True},
    {"id": 2, "name": "Binh Tran", "email": "binh@example.com", "role": "admin", "is_active": False},
    {"id": 3, "name": "Chi Le", "email": "chi@corp.com", "role": "super_admin", "is_active": True},
]


def test_login_returns_session_user():
    auth = InMemoryAuth({"access_token": "tok", "user": {"id": 2, "name": "Binh", "email": "binh@example.com", "role": "admin"}})

    s_user = AuthService(auth).login("binh@example.com", "secret1")

    assert s_user.user_id == 2
    assert s_user.token == "tok"
    assert s_user.role == Role.ADMIN
    assert dashboard_for(s_user.role) == "/admin/dashboard"


@pytest.mark.parametrize(
    "email, password",
    [("", "secret1"), ("not-an-email", "secret1"), ("a@b.com", "12345")],
)
def test_login_validates_before_calling_backend(email, password):
    auth = InMemoryAuth(error=AssertionError("backend must not be called"))

    with pytest.raises(ValidationError):
        AuthService(auth).login(email, password)


def test_login_bad_credentials():
    auth = InMemoryAuth(error=ApiError("Incorrect email or password", status=401))

    with pytest.raises(AuthenticationError) as exc:
        AuthService(auth).login("a@b.com", "secret1")

    assert str(exc.value) == "Invalid email or password"


def test_login_inactive_account_keeps_backend_message():
    auth = InMemoryAuth(error=ApiError("Account is disabled", status=403))

    with pytest.raises(AuthenticationError) as exc:
        AuthService(auth).login("a@b.com", "secret1")

    assert str(exc.value) == "Account is disabled"


def test_login_network_error_propagates():
    with pytest.raises(NetworkError):
        AuthService(InMemoryAuth(error=NetworkError())).login("a@b.com", "secret1")


def test_login_without_token_fails():
    with pytest.raises(AuthenticationError):
        AuthService(InMemoryAuth({"user": {"id": 1}})).login("a@b.com", "secret1")


def test_dashboard_routing():
    assert dashboard_for(Role.USER) == "/dashboard"
    assert dashboard_for(Role.ADMIN) == "/admin/dashboard"
    assert dashboard_for(Role.SUPER_ADMIN) == "/admin/dashboard"
    assert dashboard_for(None) == "/dashboard"


def test_update_profile_requires_name():
    auth = InMemoryAuth()
    svc = AuthService(auth)

    with pytest.raises(ValidationError):
        svc.update_profile(name="  ")

    svc.update_profile(name=" An ", phone=" ")
    assert auth.updates == [("An", None)]


def test_list_users_filters():
    svc = UserAdminService(InMemoryUsers(USERS))

    assert [u.id for u in svc.list_users(current_role=Role.ADMIN, search="corp")] == [3]
    assert [u.id for u in svc.list_users(current_role=Role.ADMIN, role_filter="admin")] == [2]
    assert [u.id for u in svc.list_users(current_role=Role.ADMIN, status_filter="inactive")] == [2]
    assert [u.id for u in svc.list_users(current_role=Role.ADMIN, status_filter="active")] == [1, 3]

    with pytest.raises(AuthorizationError):
        svc.list_users(current_role=Role.USER)


def test_promote_rules():
    repo = InMemoryUsers(USERS)
    svc = UserAdminService(repo)

    with pytest.raises(AuthorizationError):
        svc.promote(current_role=Role.ADMIN, user_id=1)
    with pytest.raises(ValidationError):
        svc.promote(current_role=Role.SUPER_ADMIN, user_id=2)
    with pytest.raises(ValidationError):
        svc.promote(current_role=Role.SUPER_ADMIN, user_id=42)

    svc.promote(current_role=Role.SUPER_ADMIN, user_id=1)
    assert repo.promoted == [1]


def test_to_ui_labels():
    users = UserAdminService(InMemoryUsers(USERS)).list_users(current_role=Role.SUPER_ADMIN)

    ui = [UserAdminService.to_ui(u) for u in users]

    assert [u["role"] for u in ui] == ["User", "Admin", "Super Admin"]
    assert ui[1]["status"] == "Inactive"
