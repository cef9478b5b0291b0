"""Display-specific helpers."""

from robobat.display.utils.formatting import (
    ChartGeometry,
    chart_points,
    level_color,
    time_to_empty,
)

__all__ = ["ChartGeometry", "chart_points", "level_color", "time_to_empty"]
