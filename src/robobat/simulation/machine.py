"""Battery state transitions."""

from __future__ import annotations

import random
from dataclasses import dataclass

from robobat.constants import (
    BASE_VOLTAGE,
    DRAIN_RATE,
    MAX_LEVEL,
    MIN_LEVEL,
    TEMPERATURE_JITTER,
    VOLTAGE_SPAN,
)
from robobat.simulation.models import (
    BatteryState,
    BatteryStatus,
    EventKind,
    NotificationEvent,
)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one tick: the next state and the events it triggered."""

    state: BatteryState
    events: tuple[NotificationEvent, ...] = ()


class BatteryStateMachine:
    """Derives the next battery reading from the previous one.

    Each step drains a fixed amount of charge, recomputes the voltage,
    nudges the temperature by a small random amount and re-derives the
    status from the threshold. Notification events are gated on exact
    level matches, so each fires on exactly one tick of a discharge.
    """

    def __init__(self, drain_rate: float = DRAIN_RATE, rng: random.Random | None = None) -> None:
        """Initialize the state machine.

        Args:
            drain_rate: Level lost per tick
            rng: Random source for temperature drift (seed it for reproducible runs)
        """
        self.drain_rate = drain_rate
        self.rng = rng or random.Random()

    @staticmethod
    def voltage_for(level: float) -> float:
        """Voltage for a given level, rounded to 2 decimals."""
        return round(BASE_VOLTAGE + (level / 100) * VOLTAGE_SPAN, 2)

    def step(self, state: BatteryState, threshold: float) -> StepResult:
        """Compute the state after one tick.

        Args:
            state: Current reading (not modified)
            threshold: Low-battery threshold in percent

        Returns:
            StepResult with the next state and zero or more events
        """
        level = min(max(state.level - self.drain_rate, MIN_LEVEL), MAX_LEVEL)
        jitter = self.rng.random() * 2 * TEMPERATURE_JITTER - TEMPERATURE_JITTER
        status = BatteryStatus.LOW_BATTERY if level < threshold else BatteryStatus.ACTIVE

        next_state = BatteryState(
            level=level,
            voltage=self.voltage_for(level),
            temperature=round(state.temperature + jitter, 1),
            status=status,
        )

        events: list[NotificationEvent] = []
        if level == threshold:
            events.append(NotificationEvent(EventKind.LOW_BATTERY_CROSSED, level, threshold))
        if level == MIN_LEVEL and state.level > MIN_LEVEL:
            events.append(NotificationEvent(EventKind.DEPLETED, level, threshold))

        return StepResult(next_state, tuple(events))


def recharge(state: BatteryState) -> BatteryState:
    """Return a fully charged copy of ``state`` flagged as charging.

    Voltage and temperature are left alone; the next tick recomputes them
    and also replaces the Charging status.
    """
    return state.copy(level=MAX_LEVEL, status=BatteryStatus.CHARGING)
