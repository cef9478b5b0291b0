"""Battery simulation core: state machine, history buffer and clock."""

from robobat.simulation.clock import LoopTicker, ManualTicker, SimulationClock, Ticker, TickHandle
from robobat.simulation.container import SimulationContainer
from robobat.simulation.history import HistoryBuffer
from robobat.simulation.machine import BatteryStateMachine, StepResult, recharge
from robobat.simulation.models import (
    BatteryState,
    BatteryStatus,
    EventKind,
    HistorySample,
    NotificationEvent,
)

__all__ = [
    "BatteryState",
    "BatteryStateMachine",
    "BatteryStatus",
    "EventKind",
    "HistoryBuffer",
    "HistorySample",
    "LoopTicker",
    "ManualTicker",
    "NotificationEvent",
    "SimulationClock",
    "SimulationContainer",
    "StepResult",
    "TickHandle",
    "Ticker",
    "recharge",
]
