"""Common utility functions and helpers for the robobat package."""

from robobat.utils.time import TimeUtils

__all__ = ["TimeUtils"]
