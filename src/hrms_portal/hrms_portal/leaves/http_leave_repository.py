from __future__ import annotations

from typing import Any

from ..gateway.client import ApiClient


class HttpLeaveRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def my_leaves(self) -> list[dict]:
        payload = self._client.get("/leaves/my-leaves")
        return payload if isinstance(payload, list) else []

    def apply(self, payload: dict[str, Any]) -> Any:
        return self._client.post("/leaves/", json=payload)

    def all_leaves(self) -> list[dict]:
        payload = self._client.get("/admin/leaves")
        return payload if isinstance(payload, list) else []

    def approve(self, leave_id: int) -> Any:
        return self._client.put(f"/admin/leaves/{int(leave_id)}/approve")

    def reject(self, leave_id: int) -> Any:
        return self._client.put(f"/admin/leaves/{int(leave_id)}/reject")

    def reports(self) -> Any:
        return self._client.get("/admin/reports/leaves")
