"""Presentation CLI exports."""
from .stats_command import StatsCommand

__all__ = [
    "StatsCommand",
]
