from __future__ import annotations

from typing import Any

from ..gateway.client import ApiClient


class HttpHolidayRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list(self) -> list[dict]:
        payload = self._client.get("/holidays")
        return payload if isinstance(payload, list) else []

    def add(self, payload: dict[str, Any]) -> Any:
        return self._client.post("/admin/holidays", json=payload)

    def delete(self, holiday_id: int) -> Any:
        return self._client.delete(f"/admin/holidays/{int(holiday_id)}")

    def bulk_upload(self, *, filename: str, content: bytes) -> Any:
        return self._client.upload("/admin/holidays/bulk-upload", filename=filename, content=content)
