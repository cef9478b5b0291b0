"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from robobat.settings.user import UserSettings


@dataclass
class AppPaths:
    """Application file and directory paths.

    Centralizes the locations of the Jinja2 templates and the static
    assets served alongside the dashboard pages.
    """

    templates_dir: Path
    static_dir: Path

    @classmethod
    def from_base_dir(cls, base_dir: Path) -> AppPaths:
        """Create paths from base directory."""
        return cls(
            templates_dir=base_dir / "templates",
            static_dir=base_dir / "static",
        )


class FormatAdapter:
    """Adapter for time formats from user settings.

    Isolates the rest of the application from the specific structure of
    UserSettings. All format strings come from user configuration.
    """

    def __init__(self, user_settings: UserSettings):
        """Initialize with user settings."""
        self._user = user_settings

    @property
    def sample(self) -> str:
        """Chart sample time format."""
        return self._user.time_format_sample

    @property
    def log(self) -> str:
        """Event log time format."""
        return self._user.time_format_log


class ApplicationSettings:
    """Application settings container.

    Combines user-provided configuration with application defaults:

    - Path configuration (templates, static files)
    - Time formatting through FormatAdapter

    Examples:
        user_settings = UserSettings.load()
        app_settings = ApplicationSettings(user_settings)
        template_path = app_settings.paths.templates_dir
    """

    def __init__(
        self,
        user_settings: UserSettings,
        paths: AppPaths | None = None,
        formats: FormatAdapter | None = None,
    ):
        """Initialize application settings with configuration sources."""
        self.user = user_settings
        self.paths = paths or AppPaths.from_base_dir(Path(__file__).parents[1])
        self.formats = formats or FormatAdapter(user_settings)
