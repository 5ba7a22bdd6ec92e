from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Port for user feedback on tracker transitions (check-in, breaks, check-out)."""

    @abstractmethod
    def notify(self, title: str, body: Optional[str] = None) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    def notify(self, title: str, body: Optional[str] = None) -> None:
        logger.info("%s%s", title, f": {body}" if body else "")


class SystemNotifier(Notifier):
    """Permission-gated, fire-and-forget notifier.

    ``sink`` does the actual delivery. It is only called when permission has
    been granted, and nothing it raises ever reaches the caller.
    """

    def __init__(self, sink: Callable[[str, Optional[str]], None], *, permission_granted: bool = False):
        self._sink = sink
        self._granted = bool(permission_granted)

    @property
    def permission_granted(self) -> bool:
        return self._granted

    def grant(self) -> None:
        self._granted = True

    def revoke(self) -> None:
        self._granted = False

    def notify(self, title: str, body: Optional[str] = None) -> None:
        if not self._granted:
            return
        try:
            self._sink(title, body)
        except Exception:
            logger.warning("Notification %r could not be delivered", title, exc_info=True)
