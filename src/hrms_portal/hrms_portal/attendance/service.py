from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import format_clock, format_date, format_hours, format_time, now_local, safe_parse_iso
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import TimerState
from ..core.exceptions import SessionExpiredError, ValidationError
from .model import AttendanceDay, AttendanceRecord, TimerSnapshot
from .notifier import LogNotifier, Notifier
from .repository import TrackingRepository
from .timer import AttendanceTimer

logger = logging.getLogger(__name__)

_ACTIONS = {
    TimerState.NOT_CHECKED_IN: ["check_in"],
    TimerState.WORKING: ["start_break", "check_out"],
    TimerState.ON_BREAK: ["end_break", "check_out"],
    TimerState.CHECKED_OUT: ["check_in"],
}


class TimeTrackerService:
    """Glue between the tracking endpoints, the timer and user notifications.

    ``current_status`` is a single cell written by whichever fetch finishes
    last (user action or background refresh). There is no ordering between
    them beyond arrival time.
    """

    def __init__(
        self,
        tracking: TrackingRepository,
        *,
        timer: Optional[AttendanceTimer] = None,
        notifier: Optional[Notifier] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = now_local,
    ):
        self._tracking = tracking
        self._timer = timer or AttendanceTimer()
        self._notifier = notifier or LogNotifier()
        self._history_limit = int(history_limit)
        self._clock = clock
        self._lock = threading.RLock()
        self._status = AttendanceDay()
        self._history: list[AttendanceRecord] = []

    @property
    def timer(self) -> AttendanceTimer:
        return self._timer

    @property
    def current_status(self) -> AttendanceDay:
        return self._status

    @property
    def history(self) -> list[AttendanceRecord]:
        return list(self._history)

    def _apply(self, day: AttendanceDay, history: Optional[list[AttendanceRecord]], now: datetime) -> None:
        with self._lock:
            self._status = day
            if history is not None:
                self._history = history
            self._timer.sync(day, now=now)

    def load(self, *, now: Optional[datetime] = None) -> None:
        """Fetch today-status and history; errors propagate to the caller."""
        today = AttendanceDay.from_api(self._tracking.today_status())
        rows = self._tracking.my_attendance(offset=0, limit=self._history_limit)
        history = [AttendanceRecord.from_api(r) for r in rows if isinstance(r, dict)]
        self._apply(today, history, now or self._clock())

    def refresh(self, *, now: Optional[datetime] = None) -> bool:
        """Background re-sync; a failed refresh is only logged.

        SessionExpiredError is the one failure that propagates: the token is
        gone and the owner of this tracker has to stop polling.
        """
        try:
            self.load(now=now)
            return True
        except SessionExpiredError:
            raise
        except Exception:
            logger.debug("Background refresh failed", exc_info=True)
            return False

    def check_in(self, *, now: Optional[datetime] = None) -> TimerSnapshot:
        now = now or self._clock()
        if self._timer.is_running:
            raise ValidationError("You are already checked in")

        payload = self._tracking.check_in()
        check_in_time = safe_parse_iso(payload.get("check_in_time")) if isinstance(payload, dict) else None

        with self._lock:
            self._timer.checked_in(check_in_time or now, now=now)
        self._notifier.notify("Checked in successfully!", f"Started at {format_time(check_in_time or now)}")

        self.refresh(now=now)
        return self._timer.tick(now)

    def check_out(self, *, now: Optional[datetime] = None) -> TimerSnapshot:
        now = now or self._clock()
        if not self._timer.is_running:
            raise ValidationError("You are not checked in")

        worked = self._timer.worked_seconds(now)
        payload = self._tracking.check_out()
        check_out_time = safe_parse_iso(payload.get("check_out_time")) if isinstance(payload, dict) else None

        with self._lock:
            self._timer.checked_out(now=now, check_out_time=check_out_time)
        self._notifier.notify("Checked out successfully!", f"Worked {format_clock(worked)}")

        self.refresh(now=now)
        return self._timer.tick(now)

    def start_break(self, *, now: Optional[datetime] = None) -> TimerSnapshot:
        now = now or self._clock()
        with self._lock:
            self._timer.start_break(now=now)
        self._notifier.notify("Break started", f"At {format_time(now, '%H:%M:%S')}")
        return self._timer.tick(now)

    def end_break(self, *, now: Optional[datetime] = None) -> TimerSnapshot:
        now = now or self._clock()
        with self._lock:
            duration = self._timer.end_break(now=now)
        self._notifier.notify("Break ended", f"Break lasted {format_clock(duration)}")
        return self._timer.tick(now)

    def snapshot(self, *, now: Optional[datetime] = None) -> dict:
        now = now or self._clock()
        with self._lock:
            snap = self._timer.tick(now)
            day = self._status
        return {
            **snap.to_dict(),
            "check_in": format_time(day.check_in_time),
            "check_out": format_time(day.check_out_time),
            "total_hours": format_hours(day.total_hours),
            "actions": list(_ACTIONS[snap.state]),
            "completed": snap.state == TimerState.CHECKED_OUT,
        }

    def history_ui(self) -> list[dict]:
        return [self._to_ui(r) for r in self._history]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        # total_hours is the backend's figure; never recomputed from timestamps here.
        return {
            "id": r.id,
            "date": format_date(r.date),
            "check_in": format_time(r.check_in_time),
            "check_out": format_time(r.check_out_time),
            "total_hours": format_hours(r.total_hours),
            "status": "Complete" if r.is_complete else "Incomplete",
            "css_class": "bg-green-100 text-green-800" if r.is_complete else "bg-yellow-100 text-yellow-800",
        }
