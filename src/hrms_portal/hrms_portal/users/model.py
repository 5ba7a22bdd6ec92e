from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


def parse_role(value) -> Role:
    try:
        return Role(str(value or Role.USER.value))
    except ValueError:
        return Role.USER


@dataclass(frozen=True)
class User:
    """Thực thể người dùng như backend trả về."""

    id: int
    name: str
    email: str
    role: Role
    is_active: bool = True
    phone: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "User":
        return cls(
            id=int(payload.get("id") or 0),
            name=str(payload.get("name") or ""),
            email=str(payload.get("email") or ""),
            role=parse_role(payload.get("role")),
            is_active=bool(payload.get("is_active", True)),
            phone=payload.get("phone") or None,
        )


@dataclass(frozen=True)
class SessionUser:
    """Login result; the controller mirrors it into the Flask cookie session."""

    user_id: int
    name: str
    email: str
    role: Role
    token: str
    user: dict
