from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ApiError(DomainError):
    """Raised when the HRMS backend rejects a call or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details


class NetworkError(ApiError):
    """No response from the backend (connection refused, timeout, DNS...)."""

    def __init__(self, message: str = "Network error. Please check your connection.", *, details: Any = None):
        super().__init__(message, status=0, code="NETWORK_ERROR", details=details)


class SessionExpiredError(ApiError):
    """Backend answered 401; the stored token is no longer valid."""

    def __init__(self, message: str = "Session expired. Please login again.", *, details: Any = None):
        super().__init__(message, status=401, code="SESSION_EXPIRED", details=details)
