from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .attendance.http_tracking_repository import HttpTrackingRepository
from .attendance.notifier import LogNotifier, Notifier, SystemNotifier
from .attendance.registry import TrackerRegistry
from .attendance.service import TimeTrackerService
from .core.constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT_SECONDS, DEFAULT_HISTORY_LIMIT, REFRESH_INTERVAL_SECONDS
from .gateway.client import ApiClient, ApiConfig
from .gateway.session import AuthSession, AuthSessionStore
from .holidays.http_holiday_repository import HttpHolidayRepository
from .holidays.service import HolidayService
from .leaves.http_leave_repository import HttpLeaveRepository
from .leaves.service import LeaveService
from .users.http_user_repository import HttpAuthRepository, HttpUserRepository
from .users.service import AuthService, UserAdminService


@dataclass(frozen=True)
class Container:
    api_config: ApiConfig
    sessions: AuthSessionStore
    notifier: Notifier
    trackers: TrackerRegistry
    client_factory: Callable[[AuthSession], ApiClient]

    def client_for(self, user_id: Optional[int]) -> ApiClient:
        auth = self.sessions.get(user_id) if user_id is not None else AuthSession()
        return self.client_factory(auth)

    def auth_service(self, user_id: Optional[int] = None) -> AuthService:
        return AuthService(HttpAuthRepository(self.client_for(user_id)))

    def user_admin_service(self, user_id: int) -> UserAdminService:
        return UserAdminService(HttpUserRepository(self.client_for(user_id)))

    def holiday_service(self, user_id: int) -> HolidayService:
        return HolidayService(HttpHolidayRepository(self.client_for(user_id)))

    def leave_service(self, user_id: int) -> LeaveService:
        return LeaveService(HttpLeaveRepository(self.client_for(user_id)))

    def tracker(self, user_id: int) -> TimeTrackerService:
        return self.trackers.get(user_id)


def build_container(
    *,
    settings: dict[str, Any],
    client_factory: Optional[Callable[[AuthSession], ApiClient]] = None,
    notifier: Optional[Notifier] = None,
) -> Container:
    api_config = ApiConfig(
        base_url=str(settings.get("API_BASE_URL", DEFAULT_API_BASE_URL)),
        timeout=float(settings.get("API_TIMEOUT_SECONDS", DEFAULT_API_TIMEOUT_SECONDS)),
    )
    sessions = AuthSessionStore()
    make_client = client_factory or (lambda auth: ApiClient(api_config, auth))

    if notifier is None:
        notifier = SystemNotifier(
            LogNotifier().notify,
            permission_granted=bool(settings.get("NOTIFICATIONS_ENABLED", True)),
        )

    history_limit = int(settings.get("HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT))

    def make_tracker(user_id: int) -> TimeTrackerService:
        return TimeTrackerService(
            HttpTrackingRepository(make_client(sessions.get(user_id))),
            notifier=notifier,
            history_limit=history_limit,
        )

    trackers = TrackerRegistry(
        make_tracker,
        refresh_interval=float(settings.get("REFRESH_INTERVAL_SECONDS", REFRESH_INTERVAL_SECONDS)),
        autostart=bool(settings.get("BACKGROUND_REFRESH", True)),
    )

    return Container(
        api_config=api_config,
        sessions=sessions,
        notifier=notifier,
        trackers=trackers,
        client_factory=make_client,
    )
