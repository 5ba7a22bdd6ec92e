from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicRefresher:
    """Runs ``callback`` every ``interval`` seconds on a daemon thread.

    Failures are logged and swallowed: a periodic background task must never
    surface errors to the user.
    """

    def __init__(self, callback: Callable[[], None], *, interval: float, name: str = "refresher"):
        self._callback = callback
        self._interval = float(interval)
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.debug("%s started (every %ss)", self._name, self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.debug("%s stopped", self._name)

    def run_once(self) -> None:
        try:
            self._callback()
        except Exception:
            logger.debug("%s: background run failed", self._name, exc_info=True)

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.run_once()
