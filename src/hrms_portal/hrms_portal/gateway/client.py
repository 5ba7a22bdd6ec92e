from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import ApiError, NetworkError, SessionExpiredError
from .session import AuthSession

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_API_TIMEOUT_SECONDS


def error_message_from_body(body: Any) -> str:
    """Pick the user-facing message out of a backend error body."""
    if not isinstance(body, dict):
        return "An unexpected error occurred"

    detail = body.get("detail")
    if detail:
        if isinstance(detail, list):
            first = detail[0] if detail else None
            if isinstance(first, dict) and first.get("msg"):
                return str(first["msg"])
            return "Validation error occurred"
        if isinstance(detail, str):
            return detail
    if body.get("message"):
        return str(body["message"])
    return "An unexpected error occurred"


class ApiClient:
    """HTTP client for the HRMS REST API.

    Attaches the bearer token of the bound AuthSession and translates every
    failure into an ApiError subclass so callers only deal with one hierarchy.
    """

    def __init__(self, config: ApiConfig, auth: AuthSession, *, http: Optional[requests.Session] = None):
        self._config = config
        self._auth = auth
        self._http = http or requests.Session()
        self._http.headers.update({"Content-Type": "application/json"})

    @property
    def auth(self) -> AuthSession:
        return self._auth

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        if self._auth.token:
            return {"Authorization": f"Bearer {self._auth.token}"}
        return {}

    def request(self, method: str, path: str, **kwargs) -> Any:
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            resp = self._http.request(
                method,
                self._url(path),
                headers=headers,
                timeout=self._config.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: no response (%s)", method, path, e)
            raise NetworkError(details=str(e)) from e

        if resp.status_code >= 400:
            raise self._translate(method, path, resp)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    def _translate(self, method: str, path: str, resp: requests.Response) -> ApiError:
        try:
            body = resp.json()
        except ValueError:
            body = None

        logger.warning("%s %s failed with status %s", method, path, resp.status_code)

        if resp.status_code == 401:
            self._auth.clear()
            return SessionExpiredError(details=body)

        code = body.get("code") if isinstance(body, dict) else None
        return ApiError(error_message_from_body(body), status=resp.status_code, code=code, details=body)

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, *, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload(self, path: str, *, filename: str, content: bytes, field_name: str = "file") -> Any:
        # requests sets the multipart boundary itself; drop the JSON default.
        return self.request(
            "POST",
            path,
            files={field_name: (filename, content)},
            headers={"Content-Type": None},
        )
