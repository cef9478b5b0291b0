"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- ApplicationSettings: Internal application settings and defaults
"""

from robobat.settings.application import AppPaths, ApplicationSettings, FormatAdapter
from robobat.settings.user import UserSettings

__all__ = ["AppPaths", "ApplicationSettings", "FormatAdapter", "UserSettings"]
