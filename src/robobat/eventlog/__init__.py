"""Event log package - remote client, models and custom errors."""

from .api import EventLogAPI
from .errors import (
    ClientError,
    LogAPIError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServerError,
)
from .models import Address, LogEntry, LogStatus, UserRecord

__all__ = [
    "Address",
    "ClientError",
    "EventLogAPI",
    "LogAPIError",
    "LogEntry",
    "LogStatus",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RateLimitError",
    "ServerError",
    "UserRecord",
]
