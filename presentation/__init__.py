"""Presentation layer - HTTP API and console commands."""
from .api import create_app
from .cli import StatsCommand

__all__ = [
    "create_app",
    "StatsCommand",
]
