"""RoboBat - simulated battery telemetry dashboard."""

__version__ = "0.1.0"
