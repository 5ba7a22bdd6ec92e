from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..gateway.client import ApiClient


def _as_list(payload: Any) -> list[dict]:
    return payload if isinstance(payload, list) else []


class HttpTrackingRepository:
    """/trackers endpoints of the HRMS API."""

    def __init__(self, client: ApiClient):
        self._client = client

    def check_in(self) -> Any:
        return self._client.post("/trackers/check-in")

    def check_out(self) -> Any:
        return self._client.post("/trackers/check-out")

    def today_status(self) -> Optional[dict]:
        payload = self._client.get("/trackers/today-status")
        return payload if isinstance(payload, dict) else None

    def my_attendance(self, *, offset: int = 0, limit: int = 30) -> list[dict]:
        return _as_list(self._client.get("/trackers/my-attendance", params={"offset": offset, "limit": limit}))

    def all_attendance(self) -> list[dict]:
        return _as_list(self._client.get("/trackers/"))

    def attendance_by_user(self, user_id: int, work_date: Optional[date] = None) -> list[dict]:
        params = {"date": work_date.strftime("%Y-%m-%d")} if work_date else None
        return _as_list(self._client.get(f"/trackers/user/{int(user_id)}", params=params))
