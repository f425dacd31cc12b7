"""Service adapters."""

from .report_writer import ReportWriter, build_testng_tree

__all__ = ["ReportWriter", "build_testng_tree"]
