from __future__ import annotations

from typing import Any, Optional, Protocol


class AuthRepository(Protocol):
    def login(self, *, email: str, password: str) -> dict:
        raise NotImplementedError

    def get_profile(self) -> dict:
        raise NotImplementedError

    def update_profile(self, *, name: str, phone: Optional[str] = None) -> Any:
        raise NotImplementedError


class UserRepository(Protocol):
    def list_users(self) -> list[dict]:
        raise NotImplementedError

    def toggle_status(self, user_id: int) -> Any:
        raise NotImplementedError

    def promote(self, user_id: int) -> Any:
        raise NotImplementedError

    def dashboard(self) -> Optional[dict]:
        raise NotImplementedError
