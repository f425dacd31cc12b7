"""Port interfaces for external dependencies.

This module defines the protocols that adapters implement: the container
under test, the logger and the report writer. Tests substitute fakes for
any of them.
"""

from .container import ContainerPort
from .services import LoggerPort, NullLogger, ReportWriterPort

__all__ = ["ContainerPort", "LoggerPort", "NullLogger", "ReportWriterPort"]
