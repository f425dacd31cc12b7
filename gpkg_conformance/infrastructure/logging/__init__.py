"""Logging infrastructure.

This module provides the rich console logging adapter.
"""

from .console_logger import ConsoleLogger, LogContext, LogLevel

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
]
