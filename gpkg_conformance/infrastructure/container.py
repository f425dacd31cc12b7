from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.ports.services import NullLogger
from ..application.test_run_orchestrator import TestRunOrchestrator
from ..config import ConformanceConfig
from .logging.console_logger import ConsoleLogger
from .services.report_writer import ReportWriter
from .sqlite.geopackage_container import GeoPackageContainer

if TYPE_CHECKING:
    from pathlib import Path

    from ..application.ports.services import LoggerPort, ReportWriterPort


class DependencyContainer:
    pass

    def __init__(
        self,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        config: ConformanceConfig | None = None,
    ) -> None:
        super().__init__()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self.config = config or ConformanceConfig()
        self._logger_instance: LoggerPort | None = None
        self._report_writer_instance: ReportWriterPort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_report_writer(self) -> ReportWriterPort:
        if self._report_writer_instance is None:
            self._report_writer_instance = ReportWriter()
        return self._report_writer_instance

    def open_container(self, path: Path) -> GeoPackageContainer:
        return GeoPackageContainer.open(path, chunk_size=self.config.chunk_size)

    def create_orchestrator(self) -> TestRunOrchestrator:
        # Never cached: an orchestrator serves exactly one run.
        return TestRunOrchestrator(
            settings=self.config.evaluation_settings(),
            logger=self.create_logger(),
        )
