"""User-facing notifications (toasts)."""

from robobat.notifications.sink import Notification, NotificationLevel, NotificationSink

__all__ = ["Notification", "NotificationLevel", "NotificationSink"]
