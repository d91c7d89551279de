"""Structured logging for the stats service."""
from .config import bootstrap_logging, shutdown_logging
from .context import bind, context, get_context, snapshot
from .levels import LogLevel
from .logger import StructuredLogger, get_logger, timed

__all__ = [
    "bootstrap_logging",
    "shutdown_logging",
    "bind",
    "snapshot",
    "context",
    "get_context",
    "LogLevel",
    "StructuredLogger",
    "get_logger",
    "timed",
]
