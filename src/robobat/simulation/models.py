"""Data models for the simulated battery."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from robobat.constants import INITIAL_TEMPERATURE, MAX_LEVEL


class BatteryStatus(str, Enum):
    """Operating status shown on the dashboard."""

    ACTIVE = "Active"
    LOW_BATTERY = "LowBattery"
    CHARGING = "Charging"

    @property
    def label(self) -> str:
        """Human-readable label for the status tile."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    BatteryStatus.ACTIVE: "Active",
    BatteryStatus.LOW_BATTERY: "⚠️ LOW BATTERY",
    BatteryStatus.CHARGING: "Charging...",
}


@dataclass
class BatteryState:
    """Current reading of the simulated battery.

    Attributes:
        level: State of charge in percent, kept within 0-100
        voltage: Terminal voltage derived from level (2 decimals)
        temperature: Cell temperature in °C (1 decimal)
        status: Active, LowBattery or Charging
    """

    level: float = MAX_LEVEL
    voltage: float = 12.6
    temperature: float = INITIAL_TEMPERATURE
    status: BatteryStatus = BatteryStatus.ACTIVE

    def copy(self, **changes: object) -> BatteryState:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]


@dataclass(frozen=True)
class HistorySample:
    """One charted point: wall-clock label and level (1 decimal)."""

    time: str
    level: float


class EventKind(str, Enum):
    """Transitions that produce a user notification."""

    LOW_BATTERY_CROSSED = "LowBatteryCrossed"
    DEPLETED = "Depleted"


@dataclass(frozen=True)
class NotificationEvent:
    """Notification emitted by a state-machine step."""

    kind: EventKind
    level: float
    threshold: float
