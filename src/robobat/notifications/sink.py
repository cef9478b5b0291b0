"""Transient, dismissible notifications raised by the simulation and by user actions."""

from __future__ import annotations

import itertools
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Final

from robobat.constants import NOTIFICATION_LIFETIME
from robobat.simulation.models import EventKind, NotificationEvent
from robobat.utils import TimeUtils

logger: Final = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """Severity of a notification; also the CSS modifier of its toast."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


@dataclass
class Notification:
    """A message shown to the user until it expires or is dismissed."""

    id: int
    level: NotificationLevel
    message: str
    created_at: datetime
    dismissed: bool = False

    def is_visible(self, now: datetime, lifetime: timedelta) -> bool:
        """Return True while not dismissed and younger than ``lifetime``."""
        return not self.dismissed and now - self.created_at < lifetime


def format_threshold(value: float) -> str:
    """Render a threshold without a trailing ``.0`` (20.0 -> "20").

    The text parses back to the same float, so it can prefill a form field.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class NotificationSink:
    """Turns state-machine events and action results into notifications.

    The sink does not de-duplicate: the state machine emits each event on
    exactly one tick, so every call here produces exactly one message.
    """

    def __init__(
        self,
        lifetime: timedelta = NOTIFICATION_LIFETIME,
        clock: Callable[[], datetime] = TimeUtils.now_localized,
        max_items: int = 50,
    ) -> None:
        """Initialize the sink.

        Args:
            lifetime: How long a notification stays visible
            clock: Source of the current time
            max_items: Number of notifications retained, visible or not
        """
        self.lifetime = lifetime
        self.clock = clock
        self._items: deque[Notification] = deque(maxlen=max_items)
        self._ids = itertools.count(1)

    def notify(self, event: NotificationEvent) -> Notification:
        """Surface a state-machine event."""
        if event.kind is EventKind.LOW_BATTERY_CROSSED:
            return self.push(
                NotificationLevel.WARNING,
                f"Warning! Charge below {format_threshold(event.threshold)}%!",
            )
        return self.push(NotificationLevel.ERROR, "Critical shutdown! Battery depleted.")

    def success(self, message: str) -> Notification:
        return self.push(NotificationLevel.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.push(NotificationLevel.ERROR, message)

    def push(self, level: NotificationLevel, message: str) -> Notification:
        """Record and log a notification."""
        item = Notification(next(self._ids), level, message, self.clock())
        self._items.append(item)
        logger.log(level.log_level, "Notification #%d: %s", item.id, message)
        return item

    def dismiss(self, notification_id: int) -> bool:
        """Hide a notification.

        Returns:
            False if no notification has that id
        """
        for item in self._items:
            if item.id == notification_id:
                item.dismissed = True
                return True
        return False

    def active(self) -> list[Notification]:
        """Visible notifications, oldest first."""
        now = self.clock()
        return [item for item in self._items if item.is_visible(now, self.lifetime)]

    @property
    def history(self) -> list[Notification]:
        """Every retained notification, including expired and dismissed ones."""
        return list(self._items)
