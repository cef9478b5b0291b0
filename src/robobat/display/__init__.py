"""Dashboard rendering: Jinja2 templates and their contexts."""

from robobat.display.render import DashboardContextBuilder, TemplateRenderer

__all__ = ["DashboardContextBuilder", "TemplateRenderer"]
