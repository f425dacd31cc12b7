from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from ...domain.entities.verdict import RunResult, ValidationVerdict

MAX_MESSAGE_LENGTH = 120


class SummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(
        self, result: RunResult, *, report_paths: list[Path] | None = None
    ) -> None:
        self.console.print()
        if result.verdicts:
            self.console.print(self._build_verdict_table(result))
            self.console.print()
        for class_name in result.skipped_classes:
            self.console.print(f"[dim]Skipped conformance class: {class_name}[/dim]")
        for diagnostic in result.diagnostics:
            self.console.print(f"[yellow]⚠[/yellow] {escape(diagnostic)}")
        for path in report_paths or []:
            self.console.print(f"[bold]Report:[/bold] {escape(str(path))}")
        self._print_status_summary(result)

    def _build_verdict_table(self, result: RunResult) -> Table:
        table = Table(title=f"Conformance Results: {escape(result.target)}")
        table.add_column("Class", style="cyan")
        table.add_column("Requirement", style="bold")
        table.add_column("Status", justify="center")
        table.add_column("Failure")
        table.add_column("Details", overflow="fold")
        for verdict in result.verdicts:
            table.add_row(
                verdict.class_name,
                verdict.requirement_id,
                self._status_cell(verdict),
                verdict.failure.value if verdict.failure else "",
                escape(self._details(verdict)),
            )
        return table

    @staticmethod
    def _status_cell(verdict: ValidationVerdict) -> str:
        return "[green]PASS[/green]" if verdict.passed else "[red]FAIL[/red]"

    @staticmethod
    def _details(verdict: ValidationVerdict) -> str:
        message = verdict.message or ""
        if len(message) > MAX_MESSAGE_LENGTH:
            message = message[: MAX_MESSAGE_LENGTH - 3] + "..."
        return message

    def _print_status_summary(self, result: RunResult) -> None:
        line = (
            f"{result.total} requirement(s): {result.passed} passed, "
            f"{result.failed} failed"
        )
        if result.failed:
            self.console.print(f"[bold red]✗ {line}[/bold red]")
        else:
            self.console.print(f"[bold green]✓ {line}[/bold green]")
