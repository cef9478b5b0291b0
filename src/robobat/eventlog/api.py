"""Client for the remote event-log source."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Final

import requests
from pydantic import TypeAdapter, ValidationError

from robobat.eventlog.errors import LogAPIError, NetworkError, ParseError
from robobat.eventlog.models import LogEntry, LogStatus, UserRecord
from robobat.settings import UserSettings
from robobat.utils import TimeUtils

logger: Final = logging.getLogger(__name__)

_USER_LIST: Final = TypeAdapter(list[UserRecord])


class EventLogAPI:
    """Fetches the placeholder user listing and projects it into log entries.

    The remote service knows nothing about batteries: each user's
    ``username`` becomes the operator and ``address.suite`` names the
    diagnosed module. Timestamps are synthesized backwards from now.
    """

    def __init__(
        self,
        config: UserSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Settings with URL, entry count, spacing and timeout
            clock: Source of the current time (default: now in configured timezone)
        """
        self.config = config
        self.clock = clock or (lambda: TimeUtils.now_localized(config.timezone))

    def fetch_users(self) -> list[UserRecord]:
        """Retrieve and validate the user listing.

        Raises:
            NetworkError: When the request cannot be completed
            LogAPIError: For non-200 responses (subclass chosen by status)
            ParseError: When the body is not a list of user records
        """
        try:
            resp = requests.get(self.config.log_api_url, timeout=self.config.request_timeout)
        except requests.RequestException as exc:
            logger.warning("Event log network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if resp.status_code != 200:
            body: dict[str, Any]
            try:
                decoded = resp.json()
                body = decoded if isinstance(decoded, dict) else {}
            except ValueError:
                body = {"message": resp.text}
            logger.error("Event log API error: %s", resp.status_code)
            raise LogAPIError.from_response(body, resp.status_code)

        try:
            return _USER_LIST.validate_python(resp.json())
        except (ValueError, ValidationError) as exc:
            raise ParseError(f"Unexpected user listing: {exc}", exc) from exc

    def fetch_logs(self) -> list[LogEntry]:
        """Build the event log from the first configured number of users.

        Raises:
            LogAPIError: Propagated from ``fetch_users``
        """
        users = self.fetch_users()[: self.config.log_entries]
        now = self.clock()
        entries = [
            LogEntry(
                time=TimeUtils.format_datetime(
                    now - index * self.config.log_spacing, self.config.time_format_log
                ),
                event=f"Module diagnostics {user.address.suite}",
                user=user.username,
                status=LogStatus.OK if index % 2 == 0 else LogStatus.WARNING,
            )
            for index, user in enumerate(users)
        ]
        logger.debug("Built %d event log entries", len(entries))
        return entries
