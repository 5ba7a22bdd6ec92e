from __future__ import annotations

import logging
import threading
from typing import Callable

from ..core.exceptions import SessionExpiredError
from .refresher import PeriodicRefresher
from .service import TimeTrackerService

logger = logging.getLogger(__name__)


class TrackerRegistry:
    """One TimeTrackerService (plus its background refresher) per logged-in user.

    Break bookkeeping lives only here; discarding a tracker or restarting the
    process loses it, same as reloading the page in a browser client. A user
    whose token the backend rejects is evicted on the next refresh.
    """

    def __init__(
        self,
        factory: Callable[[int], TimeTrackerService],
        *,
        refresh_interval: float,
        autostart: bool = True,
    ):
        self._factory = factory
        self._refresh_interval = float(refresh_interval)
        self._autostart = autostart
        self._lock = threading.Lock()
        self._trackers: dict[int, tuple[TimeTrackerService, PeriodicRefresher]] = {}

    def get(self, user_id: int) -> TimeTrackerService:
        user_id = int(user_id)
        with self._lock:
            entry = self._trackers.get(user_id)
            if entry:
                return entry[0]

            tracker = self._factory(user_id)
            refresher = PeriodicRefresher(
                lambda: self._refresh(user_id, tracker),
                interval=self._refresh_interval,
                name=f"tracker-refresh-{user_id}",
            )
            self._trackers[user_id] = (tracker, refresher)

        logger.info("Tracker created for user %s", user_id)
        if self._refresh(user_id, tracker) and self._autostart:
            refresher.start()
        return tracker

    def _refresh(self, user_id: int, tracker: TimeTrackerService) -> bool:
        try:
            tracker.refresh()
        except SessionExpiredError:
            logger.info("Session expired for user %s; dropping tracker", user_id)
            self.discard(user_id)
            return False
        return True

    def discard(self, user_id: int) -> None:
        with self._lock:
            entry = self._trackers.pop(int(user_id), None)
        if entry:
            entry[1].stop(timeout=1)
            logger.info("Tracker discarded for user %s", user_id)

    def shutdown(self) -> None:
        for user_id in list(self._trackers):
            self.discard(user_id)

    def __contains__(self, user_id: int) -> bool:
        return int(user_id) in self._trackers
