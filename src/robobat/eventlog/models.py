"""Typed models for the placeholder user listing and the log entries built from it.

Only the fields used by the event log are modelled; the rest of each
record is ignored.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Address(BaseModel):
    """Postal address of a placeholder user."""

    model_config = ConfigDict(extra="ignore")

    suite: str


class UserRecord(BaseModel):
    """One record of the remote user listing."""

    model_config = ConfigDict(extra="ignore")

    username: str
    address: Address


class LogStatus(str, Enum):
    """Outcome column of the event log."""

    OK = "OK"
    WARNING = "Warning"

    @property
    def badge(self) -> str:
        """CSS colour modifier for the status badge."""
        return "green" if self is LogStatus.OK else "orange"


class LogEntry(BaseModel):
    """A synthetic diagnostics record shown on the history page."""

    time: str
    event: str
    user: str
    status: LogStatus
