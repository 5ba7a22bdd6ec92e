from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_clock
from ..core.enums import TimerState
from ..core.exceptions import ValidationError
from .model import AttendanceDay, BreakInterval, TimerSnapshot

logger = logging.getLogger(__name__)


class AttendanceTimer:
    """State machine behind the time-tracker widget.

    Owns every work/break timestamp of the current session. The backend owns
    check-in/check-out; break bookkeeping is client-only and is lost whenever
    the timer is rebuilt from a fresh today-status.

    Display values are never accumulated tick by tick: ``tick(now)`` derives
    them from the stored timestamps, so a missed tick cannot drift the clock.
    """

    def __init__(self):
        self._state = TimerState.NOT_CHECKED_IN
        self._check_in_time: Optional[datetime] = None
        self._check_out_time: Optional[datetime] = None
        self._work_session_start: Optional[datetime] = None
        self._break_start: Optional[datetime] = None
        self._total_break_seconds = 0.0
        self._breaks: list[BreakInterval] = []

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def check_in_time(self) -> Optional[datetime]:
        return self._check_in_time

    @property
    def check_out_time(self) -> Optional[datetime]:
        return self._check_out_time

    @property
    def work_session_start(self) -> Optional[datetime]:
        return self._work_session_start

    @property
    def break_start(self) -> Optional[datetime]:
        return self._break_start

    @property
    def total_break_seconds(self) -> float:
        return self._total_break_seconds

    @property
    def breaks(self) -> list[BreakInterval]:
        return list(self._breaks)

    @property
    def is_running(self) -> bool:
        return self._state in {TimerState.WORKING, TimerState.ON_BREAK}

    def _reset_breaks(self) -> None:
        self._break_start = None
        self._total_break_seconds = 0.0
        self._breaks = []

    def checked_in(self, check_in_time: datetime, *, now: datetime) -> None:
        if self.is_running:
            raise ValidationError("You are already checked in")

        self._reset_breaks()
        self._state = TimerState.WORKING
        self._check_in_time = check_in_time
        self._check_out_time = None
        self._work_session_start = now

    def start_break(self, *, now: datetime) -> None:
        if self._state != TimerState.WORKING:
            raise ValidationError("You can only start a break while working")

        self._break_start = now
        self._state = TimerState.ON_BREAK

    def end_break(self, *, now: datetime) -> float:
        if self._state != TimerState.ON_BREAK or self._break_start is None:
            raise ValidationError("You are not on a break")

        interval = BreakInterval(start=self._break_start, end=now)
        duration = interval.duration_seconds(now)
        self._breaks.append(interval)
        self._total_break_seconds += duration
        self._break_start = None
        self._state = TimerState.WORKING
        return duration

    def checked_out(self, *, now: datetime, check_out_time: Optional[datetime] = None) -> None:
        if not self.is_running:
            raise ValidationError("You are not checked in")

        self._reset_breaks()
        self._work_session_start = None
        self._check_out_time = check_out_time or now
        self._state = TimerState.CHECKED_OUT

    def sync(self, day: AttendanceDay, *, now: datetime) -> None:
        """Rebuild the state from the backend's today-status.

        A refresh that reports the same open session keeps the local break
        bookkeeping; anything else starts it over from zero.
        """
        if day.check_in_time is None:
            self._reset_breaks()
            self._state = TimerState.NOT_CHECKED_IN
            self._check_in_time = None
            self._check_out_time = None
            self._work_session_start = None
            return

        if day.check_out_time is not None:
            self._reset_breaks()
            self._state = TimerState.CHECKED_OUT
            self._check_in_time = day.check_in_time
            self._check_out_time = day.check_out_time
            self._work_session_start = None
            return

        if self.is_running and self._check_in_time == day.check_in_time:
            return

        if self.is_running:
            logger.debug("Open session changed (%s -> %s); resetting breaks", self._check_in_time, day.check_in_time)
        self._reset_breaks()
        self._state = TimerState.WORKING
        self._check_in_time = day.check_in_time
        self._check_out_time = None
        self._work_session_start = now

    def current_break_seconds(self, now: datetime) -> float:
        if self._state != TimerState.ON_BREAK or self._break_start is None:
            return 0.0
        return max((now - self._break_start).total_seconds(), 0.0)

    def worked_seconds(self, now: datetime) -> float:
        if not self.is_running or self._check_in_time is None:
            return 0.0

        elapsed = (now - self._check_in_time).total_seconds()
        elapsed -= self._total_break_seconds
        elapsed -= self.current_break_seconds(now)
        return max(elapsed, 0.0)

    def tick(self, now: datetime) -> TimerSnapshot:
        worked = int(self.worked_seconds(now))
        on_break = int(self.current_break_seconds(now))
        return TimerSnapshot(
            state=self._state,
            worked_seconds=worked,
            break_seconds=on_break,
            total_break_seconds=int(self._total_break_seconds),
            work_display=format_clock(worked),
            break_display=format_clock(on_break),
        )
