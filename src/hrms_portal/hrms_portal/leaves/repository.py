from __future__ import annotations

from typing import Any, Protocol


class LeaveRepository(Protocol):
    def my_leaves(self) -> list[dict]:
        raise NotImplementedError

    def apply(self, payload: dict[str, Any]) -> Any:
        raise NotImplementedError

    def all_leaves(self) -> list[dict]:
        raise NotImplementedError

    def approve(self, leave_id: int) -> Any:
        raise NotImplementedError

    def reject(self, leave_id: int) -> Any:
        raise NotImplementedError

    def reports(self) -> Any:
        raise NotImplementedError
