"""Display-specific formatting utilities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from robobat.constants import DRAIN_RATE
from robobat.simulation.models import HistorySample
from robobat.utils import TimeUtils

GAUGE_GREEN = "#42b883"
GAUGE_YELLOW = "#f1c40f"
GAUGE_RED = "#e74c3c"


def level_color(level: float) -> str:
    """Gauge colour for a battery level.

    Args:
        level: Battery level in percent

    Returns:
        Hex colour: green above 60, yellow above 20, red otherwise
    """
    if level > 60:
        return GAUGE_GREEN
    if level > 20:
        return GAUGE_YELLOW
    return GAUGE_RED


def time_to_empty(level: float, drain_rate: float = DRAIN_RATE, tick_seconds: float = 1.0) -> str:
    """Predicted time until the battery is flat at the current drain rate.

    Args:
        level: Battery level in percent
        drain_rate: Level lost per tick
        tick_seconds: Seconds per tick

    Returns:
        Formatted duration (e.g. "6 min 40 s")
    """
    return TimeUtils.format_duration(level / drain_rate * tick_seconds)


@dataclass(frozen=True)
class ChartGeometry:
    """Size of the SVG chart's plotting area in user units."""

    width: int = 600
    height: int = 250


def chart_points(samples: Sequence[HistorySample], geometry: ChartGeometry = ChartGeometry()) -> str:
    """SVG polyline ``points`` for the level history, y-domain 0-100.

    Samples are spread evenly across the width, oldest on the left.
    """
    if not samples:
        return ""
    step = geometry.width / (len(samples) - 1) if len(samples) > 1 else 0.0
    points = []
    for index, sample in enumerate(samples):
        level = min(max(sample.level, 0.0), 100.0)
        x = index * step
        y = geometry.height - level / 100 * geometry.height
        points.append(f"{x:.1f},{y:.1f}")
    return " ".join(points)
