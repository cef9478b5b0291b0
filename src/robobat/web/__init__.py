"""HTTP surface serving the dashboard pages."""

from robobat.web.app import create_app

__all__ = ["create_app"]
