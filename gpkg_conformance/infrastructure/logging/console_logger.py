from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...domain.entities.verdict import RunResult, ValidationVerdict


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    target: str = ""
    class_name: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "classes_evaluated": 0,
            "classes_skipped": 0,
            "requirements_passed": 0,
            "requirements_failed": 0,
            "warnings": 0,
            "errors": 0,
        }

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)

    def _get_prefix(self) -> str:
        if self._context is None or not self._context.class_name:
            return ""
        return escape(f"[{self._context.class_name}] ")

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{escape(message)}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{escape(message)}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{escape(message)}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {escape(message)}")

    @override
    def log_run_start(self, target: str, class_names: Sequence[str]) -> None:
        self.clear_context()
        self.set_context(target=target)
        self.info(f"Validating container: {target}")
        if class_names:
            self.verbose(f"Enabled conformance classes: {', '.join(class_names)}")
        else:
            self.verbose("No conformance classes enabled")

    @override
    def log_class_start(self, class_name: str, requirement_count: int) -> None:
        self.set_context(class_name=class_name)
        self._stats["classes_evaluated"] += 1
        self.verbose(f"Evaluating {requirement_count} requirement(s)")

    @override
    def log_class_skipped(self, class_name: str, reason: str) -> None:
        self._stats["classes_skipped"] += 1
        self.verbose(f"Skipping conformance class {class_name}: {reason}")

    @override
    def log_verdict(self, verdict: ValidationVerdict) -> None:
        if verdict.passed:
            self._stats["requirements_passed"] += 1
            self.debug(f"{verdict.requirement_id}: PASS")
            return
        self._stats["requirements_failed"] += 1
        kind = verdict.failure.value if verdict.failure else "Failure"
        message = verdict.message or ""
        self.verbose(f"{verdict.requirement_id}: FAIL ({kind}) {message}")

    @override
    def log_run_complete(self, result: RunResult) -> None:
        elapsed = self._context.elapsed_ms() if self._context else 0.0
        self.set_context(class_name="")
        summary = (
            f"{result.total} requirement(s): {result.passed} passed, "
            f"{result.failed} failed"
        )
        if result.failed:
            self.error(summary)
        else:
            self.success(summary)
        self.debug(f"Run completed in {elapsed:.1f} ms")
