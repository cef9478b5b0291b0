# src/robobat/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - Current time retrieval with proper timezone handling
    - Datetime formatting with user preferences
    """

    @staticmethod
    def now_localized(timezone_name: str | None = None) -> datetime:
        """Get current datetime in the given timezone.

        Args:
            timezone_name: IANA timezone name (system local timezone if None)

        Returns:
            Current timezone-aware datetime
        """
        now = datetime.now(UTC)
        if timezone_name:
            return now.astimezone(ZoneInfo(timezone_name))
        return now.astimezone()

    @staticmethod
    def format_datetime(dt: datetime, format_string: str) -> str:
        """Format datetime with specified format string.

        Args:
            dt: Datetime to format
            format_string: strftime format string

        Returns:
            Formatted datetime string
        """
        return dt.strftime(format_string)

    @staticmethod
    def format_duration(seconds: float) -> str:
        """Format a number of seconds as whole minutes and seconds.

        Args:
            seconds: Duration in seconds (fractions are floored)

        Returns:
            Formatted duration (e.g., "3 min 20 s")
        """
        total = max(int(seconds), 0)
        return f"{total // 60} min {total % 60} s"
