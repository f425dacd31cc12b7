from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, override, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ...domain.entities.verdict import RunResult, ValidationVerdict


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_run_start(self, target: str, class_names: Sequence[str]) -> None: ...

    def log_class_start(self, class_name: str, requirement_count: int) -> None: ...

    def log_class_skipped(self, class_name: str, reason: str) -> None: ...

    def log_verdict(self, verdict: ValidationVerdict) -> None: ...

    def log_run_complete(self, result: RunResult) -> None: ...


@runtime_checkable
class ReportWriterPort(Protocol):
    pass

    def write_json(self, result: RunResult, output_path: Path) -> Path: ...

    def write_xml(self, result: RunResult, output_path: Path) -> Path: ...


class NullLogger(LoggerPort):
    """Logger that discards everything; the orchestrator's default."""

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_run_start(self, target: str, class_names: Sequence[str]) -> None:
        return None

    @override
    def log_class_start(self, class_name: str, requirement_count: int) -> None:
        return None

    @override
    def log_class_skipped(self, class_name: str, reason: str) -> None:
        return None

    @override
    def log_verdict(self, verdict: ValidationVerdict) -> None:
        return None

    @override
    def log_run_complete(self, result: RunResult) -> None:
        return None
