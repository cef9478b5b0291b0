"""Shared simulation state handed to the clock and the views."""

from __future__ import annotations

from dataclasses import dataclass, field

from robobat.constants import DEFAULT_THRESHOLD
from robobat.simulation.history import HistoryBuffer
from robobat.simulation.models import BatteryState


@dataclass
class SimulationContainer:
    """Single owner of the live simulation state.

    The clock writes ``state``, ``history`` and ``ticks`` once per tick;
    user actions go through the controller. Views only read.
    """

    state: BatteryState = field(default_factory=BatteryState)
    history: HistoryBuffer = field(default_factory=HistoryBuffer)
    threshold: float = DEFAULT_THRESHOLD
    dark_theme: bool = True
    ticks: int = 0
