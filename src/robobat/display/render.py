"""Page rendering components for the battery dashboard."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, cast

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from robobat.constants import DRAIN_RATE, TEMPERATURE_ALERT
from robobat.display.utils import ChartGeometry, chart_points, level_color, time_to_empty
from robobat.eventlog.models import LogEntry
from robobat.notifications.sink import Notification, format_threshold
from robobat.settings import ApplicationSettings, UserSettings
from robobat.simulation.container import SimulationContainer

# Sidebar entries: (endpoint path, page key, label)
NAVIGATION = (
    ("/", "dashboard", "📊 Dashboard"),
    ("/history", "history", "📜 Logs (API)"),
    ("/settings", "settings", "⚙️ System"),
)


class TemplateRenderer:
    """Handles the Jinja2 template environment and page rendering.

    Configures an environment with the dashboard's custom filters and a
    minimal ``url_for`` for static assets, and loads one template per page.
    """

    dashboard_template: Template
    history_template: Template
    settings_template: Template

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        user_settings: Optional[UserSettings] = None,
    ) -> None:
        """Initialize the template renderer.

        Args:
            templates_dir: Directory containing templates (default: from settings)
            user_settings: User configuration
        """
        self.user_settings = user_settings or UserSettings()
        self.app_settings = ApplicationSettings(self.user_settings)
        self.templates_dir = templates_dir or self.app_settings.paths.templates_dir

        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "j2"]),
        )

        def _url_for(endpoint: str, filename: str = "") -> str:
            """Simple url_for implementation for static assets."""
            if endpoint == "static":
                return f"/static/{filename}"
            raise ValueError(f"Unsupported endpoint: {endpoint}")

        self.env.globals.update({"url_for": _url_for, "navigation": NAVIGATION})
        self._register_filters()

        self.dashboard_template = self.env.get_template("dashboard.html.j2")
        self.history_template = self.env.get_template("history.html.j2")
        self.settings_template = self.env.get_template("settings.html.j2")

    def _register_filters(self) -> None:
        """Register custom filters with the Jinja environment."""
        self.env.filters.update(
            {
                "threshold": format_threshold,
            }
        )

    def render_dashboard(self, **context: Any) -> str:
        return cast(str, self.dashboard_template.render(**context))

    def render_history(self, **context: Any) -> str:
        return cast(str, self.history_template.render(**context))

    def render_settings(self, **context: Any) -> str:
        return cast(str, self.settings_template.render(**context))


class DashboardContextBuilder:
    """Builds template contexts from the live simulation state.

    The builder derives everything the templates display: gauge colour
    and width, time-to-empty prediction, chart polyline, status label,
    plus the layout values shared by every page (theme, active page,
    visible notifications).
    """

    def __init__(
        self,
        user_settings: Optional[UserSettings] = None,
        drain_rate: float = DRAIN_RATE,
        chart: ChartGeometry = ChartGeometry(),
    ) -> None:
        self.user_settings = user_settings or UserSettings()
        self.drain_rate = drain_rate
        self.chart = chart

    def _layout_context(
        self,
        page: str,
        container: SimulationContainer,
        notifications: list[Notification],
    ) -> Dict[str, Any]:
        return {
            "page": page,
            "dark": container.dark_theme,
            "theme_class": "dark-mode" if container.dark_theme else "light-mode",
            "notifications": notifications,
        }

    def build_dashboard_context(
        self,
        container: SimulationContainer,
        notifications: list[Notification],
    ) -> Dict[str, Any]:
        """Build complete context for the dashboard template.

        Args:
            container: Live simulation state
            notifications: Notifications to show as toasts

        Returns:
            Template context dictionary
        """
        state = container.state
        samples = container.history.samples
        color = level_color(state.level)

        ctx = self._layout_context("dashboard", container, notifications)
        ctx.update(
            {
                "refresh_seconds": self.user_settings.tick_seconds,
                "level": state.level,
                "level_text": f"{state.level:.1f}",
                "level_color": color,
                "voltage": f"{state.voltage:.2f}",
                "temperature": state.temperature,
                "temperature_alert": state.temperature > TEMPERATURE_ALERT,
                "status": state.status,
                "status_label": state.status.label,
                "time_left": time_to_empty(
                    state.level, self.drain_rate, self.user_settings.tick_seconds
                ),
                "threshold": container.threshold,
                "ticks": container.ticks,
                "history": samples,
                "chart_width": self.chart.width,
                "chart_height": self.chart.height,
                "chart_points": chart_points(samples, self.chart),
            }
        )
        return ctx

    def build_history_context(
        self,
        container: SimulationContainer,
        notifications: list[Notification],
        logs: Optional[list[LogEntry]],
    ) -> Dict[str, Any]:
        """Build context for the event log page.

        Args:
            container: Live simulation state (theme only)
            notifications: Notifications to show as toasts
            logs: Log entries, or None while unavailable
        """
        ctx = self._layout_context("history", container, notifications)
        ctx.update({"loading": logs is None, "logs": logs or []})
        return ctx

    def build_settings_context(
        self,
        container: SimulationContainer,
        notifications: list[Notification],
    ) -> Dict[str, Any]:
        """Build context for the settings page."""
        ctx = self._layout_context("settings", container, notifications)
        ctx.update({"threshold": container.threshold})
        return ctx
