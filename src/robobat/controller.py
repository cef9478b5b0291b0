# filepath: src/robobat/controller.py
"""Core controller for the RoboBat dashboard."""

from __future__ import annotations

import logging
import random
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Final
from unittest.mock import MagicMock

from pydantic import BaseModel, Field, ValidationError

from robobat.display.render import DashboardContextBuilder, TemplateRenderer
from robobat.eventlog.api import EventLogAPI
from robobat.eventlog.errors import LogAPIError
from robobat.eventlog.models import LogEntry
from robobat.notifications.sink import Notification, NotificationSink, format_threshold
from robobat.settings.application import ApplicationSettings
from robobat.settings.user import UserSettings
from robobat.simulation.clock import LoopTicker, SimulationClock, Ticker
from robobat.simulation.container import SimulationContainer
from robobat.simulation.machine import BatteryStateMachine, recharge
from robobat.simulation.models import BatteryState
from robobat.utils.time import TimeUtils

TEST_CONFIG_YAML = """\
threshold: 20
tick_seconds: 1
seed: 42
theme: dark
log_entries: 6
log_spacing_minutes: 10
timezone: "UTC"
"""

logger: Final = logging.getLogger(__name__)


class InvalidThresholdError(ValueError):
    """Raised when a submitted threshold is not a finite number."""


class ThresholdForm(BaseModel):
    """Submitted low-battery threshold.

    Any finite number is accepted, including values outside 0-100.
    """

    threshold: float = Field(allow_inf_nan=False)


class BatteryDashboard:
    """Main controller class for the dashboard application.

    This class orchestrates the dashboard workflow:
    - Loading configuration and initializing components
    - Owning the simulation container and the clock that writes it
    - Applying user actions (threshold, recharge, theme, dismissals)
    - Fetching the remote event log
    - Rendering the dashboard, history and settings pages

    All application dependencies are initialized here, making this
    the central coordination point for the application.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        config: UserSettings | None = None,
        ticker: Ticker | None = None,
        event_log_api: EventLogAPI | None = None,
        machine: BatteryStateMachine | None = None,
        sink: NotificationSink | None = None,
        template_renderer: TemplateRenderer | None = None,
        context_builder: DashboardContextBuilder | None = None,
        debug: bool = False,
    ):
        """Initialize the dashboard controller.

        Args:
            config_path: Path to config.yaml (default search path if None)
            config: Already loaded settings (takes precedence over config_path)
            ticker: Scheduler for the clock (asyncio loop timer by default)
            event_log_api: Optional custom event log client
            machine: Optional custom state machine
            sink: Optional custom notification sink
            template_renderer: Optional custom template renderer
            context_builder: Optional custom context builder
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        # Load configuration and derive application settings
        self.config: UserSettings = config or UserSettings.load(config_path)
        self.settings = ApplicationSettings(self.config)

        self.container = SimulationContainer(
            state=BatteryState(temperature=self.config.initial_temperature),
            threshold=self.config.threshold,
            dark_theme=self.config.is_dark,
        )
        self.sink = sink or NotificationSink(
            lifetime=self.config.notification_lifetime,
            clock=self._now,
        )
        self.machine = machine or BatteryStateMachine(rng=random.Random(self.config.seed))
        self.clock = SimulationClock(
            self.container,
            self.machine,
            self.sink,
            ticker or LoopTicker(),
            period=self.config.tick_seconds,
            clock=self._now,
            time_format=self.settings.formats.sample,
        )

        self.event_log_api = event_log_api or EventLogAPI(self.config, clock=self._now)

        # Initialize renderers - allow dependency injection
        self.template_renderer = template_renderer or TemplateRenderer(
            self.settings.paths.templates_dir, self.config
        )
        self.context_builder = context_builder or DashboardContextBuilder(
            self.config, drain_rate=self.machine.drain_rate
        )

    def _now(self) -> datetime:
        return TimeUtils.now_localized(self.config.timezone)

    # ── lifecycle ─────────────────────────────────────────────────────────
    def start(self) -> None:
        """Start the simulation clock."""
        self.clock.start()

    def stop(self) -> None:
        """Stop the simulation clock; no further ticks fire."""
        self.clock.stop()

    # ── user actions ──────────────────────────────────────────────────────
    def set_threshold(self, value: float) -> Notification:
        """Commit a new threshold and re-arm the clock around it.

        Args:
            value: New threshold in percent (not range checked)

        Returns:
            The confirmation notification
        """
        self.container.threshold = value
        if self.clock.running:
            self.clock.restart()
        logger.info("Low-battery threshold set to %s%%", format_threshold(value))
        return self.sink.success(f"Threshold updated: {format_threshold(value)}%")

    def save_threshold(self, raw: str | float) -> Notification:
        """Parse and commit a threshold submitted from the settings form.

        Raises:
            InvalidThresholdError: If ``raw`` is not a finite number
        """
        if isinstance(raw, str):
            raw = raw.strip()
        try:
            form = ThresholdForm.model_validate({"threshold": raw})
        except ValidationError as err:
            raise InvalidThresholdError(f"Invalid threshold: {raw!r}") from err
        return self.set_threshold(form.threshold)

    def recharge(self) -> Notification:
        """Instantly restore the battery to 100% and flag it as charging."""
        self.container.state = recharge(self.container.state)
        logger.info("Battery recharged")
        return self.sink.success("Battery fully charged! 🔋")

    def toggle_theme(self) -> bool:
        """Flip between dark and light mode.

        Returns:
            True if the dark theme is now active
        """
        self.container.dark_theme = not self.container.dark_theme
        return self.container.dark_theme

    def dismiss_notification(self, notification_id: int) -> bool:
        return self.sink.dismiss(notification_id)

    # ── event log ─────────────────────────────────────────────────────────
    def load_event_log(self) -> list[LogEntry] | None:
        """Fetch the event log, or None if the remote source failed.

        Failures are logged and otherwise ignored; the history page keeps
        showing its loading state.
        """
        try:
            return self.event_log_api.fetch_logs()
        except LogAPIError as err:
            level = logging.WARNING if err.is_client_error else logging.ERROR
            logger.log(level, "Event log unavailable (%s): %s", err.code, err.message)
            return None

    # ── rendering ─────────────────────────────────────────────────────────
    def render_dashboard(self) -> str:
        ctx = self.context_builder.build_dashboard_context(self.container, self.sink.active())
        return self.template_renderer.render_dashboard(**ctx)

    def render_history(self, logs: list[LogEntry] | None) -> str:
        ctx = self.context_builder.build_history_context(
            self.container, self.sink.active(), logs
        )
        return self.template_renderer.render_history(**ctx)

    def render_settings(self) -> str:
        ctx = self.context_builder.build_settings_context(self.container, self.sink.active())
        return self.template_renderer.render_settings(**ctx)

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the live state."""
        state = self.container.state
        return {
            "state": {
                "level": state.level,
                "voltage": state.voltage,
                "temperature": state.temperature,
                "status": state.status.value,
            },
            "threshold": self.container.threshold,
            "ticks": self.container.ticks,
            "dark_theme": self.container.dark_theme,
            "history": [
                {"time": sample.time, "level": sample.level}
                for sample in self.container.history
            ],
            "notifications": [
                {"id": n.id, "level": n.level.value, "message": n.message}
                for n in self.sink.active()
            ],
        }

    @classmethod
    def create_for_testing(
        cls,
        config_path: Path | None = None,
        ticker: Ticker | None = None,
        mock_logs: list[LogEntry] | None = None,
        log_error: LogAPIError | None = None,
    ) -> BatteryDashboard:
        """Create BatteryDashboard instance configured for testing.

        Args:
            config_path: Path to config file (creates default if None)
            ticker: Ticker to drive the clock (e.g. ManualTicker)
            mock_logs: Entries the mocked event log client returns
            log_error: Error the mocked event log client raises

        Returns:
            BatteryDashboard instance configured for testing
        """
        if config_path is None:
            # Create temp config file with reasonable defaults
            with tempfile.NamedTemporaryFile(suffix=".yaml", delete=False) as temp:
                temp_path = Path(temp.name)
                temp_path.write_text(TEST_CONFIG_YAML)
                config_path = temp_path

        mock_api = None
        if mock_logs is not None or log_error is not None:
            mock_api = MagicMock(spec=EventLogAPI)
            if log_error is not None:
                mock_api.fetch_logs.side_effect = log_error
            else:
                mock_api.fetch_logs.return_value = mock_logs

        return cls(
            config_path=config_path,
            ticker=ticker,
            event_log_api=mock_api,
            debug=True,
        )
