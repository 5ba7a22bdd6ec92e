from __future__ import annotations

from typing import Any, Optional

from ..gateway.client import ApiClient


class HttpAuthRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, *, email: str, password: str) -> dict:
        payload = self._client.post("/auth/login", json={"email": email, "password": password})
        return payload if isinstance(payload, dict) else {}

    def get_profile(self) -> dict:
        payload = self._client.get("/auth/profile")
        return payload if isinstance(payload, dict) else {}

    def update_profile(self, *, name: str, phone: Optional[str] = None) -> Any:
        data = {"name": name}
        if phone:
            data["phone"] = phone
        return self._client.put("/auth/profile", json=data)


class HttpUserRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_users(self) -> list[dict]:
        payload = self._client.get("/admin/users")
        return payload if isinstance(payload, list) else []

    def toggle_status(self, user_id: int) -> Any:
        return self._client.put(f"/admin/users/{int(user_id)}/toggle-status")

    def promote(self, user_id: int) -> Any:
        return self._client.put(f"/admin/users/{int(user_id)}/promote")

    def dashboard(self) -> Optional[dict]:
        payload = self._client.get("/admin/dashboard")
        return payload if isinstance(payload, dict) else None
