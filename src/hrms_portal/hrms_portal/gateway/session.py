from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import Role


@dataclass
class AuthSession:
    """Token + user blob for one logged-in user.

    Note: Lives in process memory only; the Flask cookie session keeps the same
    values so a new worker can rebuild it.
    """

    token: Optional[str] = None
    user: Optional[dict[str, Any]] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def role(self) -> Optional[Role]:
        raw = (self.user or {}).get("role")
        try:
            return Role(raw) if raw else None
        except ValueError:
            return None

    def set(self, token: str, user: Optional[dict[str, Any]]) -> None:
        with self._lock:
            self.token = token
            self.user = dict(user or {})

    def clear(self) -> None:
        with self._lock:
            self.token = None
            self.user = None


class AuthSessionStore:
    """AuthSession per user id, shared by every API client built for that user."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: dict[int, AuthSession] = {}

    def bind(self, user_id: int, token: Optional[str], user: Optional[dict[str, Any]] = None) -> AuthSession:
        with self._lock:
            auth = self._sessions.setdefault(int(user_id), AuthSession())
        if token and auth.token != token:
            auth.set(token, user if user is not None else auth.user)
        return auth

    def get(self, user_id: int) -> AuthSession:
        with self._lock:
            return self._sessions.setdefault(int(user_id), AuthSession())

    def drop(self, user_id: int) -> None:
        with self._lock:
            auth = self._sessions.pop(int(user_id), None)
        if auth:
            auth.clear()
