from __future__ import annotations

from typing import Any, Protocol


class HolidayRepository(Protocol):
    def list(self) -> list[dict]:
        raise NotImplementedError

    def add(self, payload: dict[str, Any]) -> Any:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> Any:
        raise NotImplementedError

    def bulk_upload(self, *, filename: str, content: bytes) -> Any:
        raise NotImplementedError
