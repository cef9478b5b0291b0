"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import logging
import os
import re
from datetime import timedelta
from pathlib import Path
from typing import ClassVar, Final, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from robobat.constants import (
    DEFAULT_THRESHOLD,
    DEFAULT_TICK_SECONDS,
    INITIAL_TEMPERATURE,
    LOG_API_URL,
    LOG_ENTRY_COUNT,
    LOG_SPACING_MINUTES,
)

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for the simulation, the dashboard and the event log.

    Every field has a default, so an empty or missing config.yaml yields a
    working dashboard. The low-battery threshold is deliberately unbounded:
    values outside 0-100 are accepted and simply never (or always) trip.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/robobat/config.yaml").expanduser(),
        Path("/etc/robobat/config.yaml"),
    ]

    # Simulation
    threshold: float = Field(
        DEFAULT_THRESHOLD, description="Battery % at which the low-battery warning fires"
    )
    tick_seconds: float = Field(
        DEFAULT_TICK_SECONDS, gt=0, description="Seconds between simulation ticks"
    )
    initial_temperature: float = Field(
        INITIAL_TEMPERATURE, description="Battery temperature at startup (°C)"
    )
    seed: int | None = Field(None, description="Seed for the temperature random walk")

    # Dashboard
    theme: Literal["dark", "light"] = "dark"
    notification_seconds: float = Field(
        5.0, gt=0, description="Seconds a notification stays on screen"
    )
    time_format_sample: str = Field(
        "%H:%M:%S", description="Chart sample time format (e.g. 14:05:09)"
    )
    time_format_log: str = Field("%H:%M", description="Event log time format (e.g. 14:05)")
    timezone: str | None = Field(
        None, description="Timezone for displayed times; system local time if null"
    )

    # Remote event log
    log_api_url: str = Field(LOG_API_URL, description="User listing endpoint used as log source")
    log_entries: int = Field(LOG_ENTRY_COUNT, ge=1, description="Log records to show")
    log_spacing_minutes: int = Field(
        LOG_SPACING_MINUTES, gt=0, description="Minutes between consecutive synthetic log records"
    )
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds")

    # Web server
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)

    # ---- validators ----
    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Reject timezone names unknown to the tz database."""
        if v is not None:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    # ---- convenience methods ----
    @property
    def is_dark(self) -> bool:
        """Whether the dashboard starts in dark mode."""
        return self.theme == "dark"

    @property
    def notification_lifetime(self) -> timedelta:
        """How long a notification stays visible."""
        return timedelta(seconds=self.notification_seconds)

    @property
    def log_spacing(self) -> timedelta:
        """Gap between consecutive synthetic log records."""
        return timedelta(minutes=self.log_spacing_minutes)

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object (defaults if no file is found)

        Raises:
            FileNotFoundError: If ROBOBAT_CONFIG names a missing file
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("ROBOBAT_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from ROBOBAT_CONFIG not found: {path}")
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    logger.debug("No configuration file found, using defaults")
                    return cls()

        # Load and parse config
        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
