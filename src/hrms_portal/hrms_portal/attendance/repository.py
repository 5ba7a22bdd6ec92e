from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol


class TrackingRepository(Protocol):
    def check_in(self) -> Any:
        raise NotImplementedError

    def check_out(self) -> Any:
        raise NotImplementedError

    def today_status(self) -> Optional[dict]:
        raise NotImplementedError

    def my_attendance(self, *, offset: int = 0, limit: int = 30) -> list[dict]:
        raise NotImplementedError

    def all_attendance(self) -> list[dict]:
        """Admin-only listing of every user's records."""

        raise NotImplementedError

    def attendance_by_user(self, user_id: int, work_date: Optional[date] = None) -> list[dict]:
        raise NotImplementedError
