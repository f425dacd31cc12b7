"""Table definition checks.

Compares the column metadata a container reports for a table against an
expected schema fragment. Every expected column is checked independently;
the per-column results are kept as named flags so a failed verdict can say
exactly which property of which column disagreed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...exceptions import TableNotFoundError
from ..entities.verdict import FailureKind, ValidationVerdict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...application.ports.container import ContainerPort
    from ..entities.schema import ColumnInfo, ExpectedColumn, ExpectedColumnSchema


@dataclass(frozen=True, slots=True)
class ColumnCheck:
    expected: ExpectedColumn
    found: ColumnInfo | None
    present: bool
    type_matches: bool
    notnull_matches: bool
    default_matches: bool

    @property
    def passed(self) -> bool:
        return (
            self.present
            and self.type_matches
            and self.notnull_matches
            and self.default_matches
        )

    def mismatches(self) -> list[str]:
        name = self.expected.name
        if not self.present or self.found is None:
            return [f"{name} missing"]
        problems: list[str] = []
        if not self.type_matches:
            problems.append(
                f"{name} type mismatch (expected {self.expected.declared_type}, "
                f"found {self.found.declared_type or '<none>'})"
            )
        if not self.notnull_matches:
            problems.append(
                f"{name} notnull mismatch (expected {int(self.expected.not_null)}, "
                f"found {int(self.found.not_null)})"
            )
        if not self.default_matches:
            problems.append(
                f"{name} default mismatch (expected "
                f"{'a' if self.expected.has_default else 'no'} default)"
            )
        return problems


@dataclass(frozen=True, slots=True)
class TableDefinitionReport:
    table_name: str
    checks: tuple[ColumnCheck, ...]
    found_columns: tuple[str, ...]
    extra_columns: tuple[str, ...]

    @property
    def passed(self) -> bool:
        return bool(self.found_columns) and all(check.passed for check in self.checks)

    def failed_checks(self) -> tuple[ColumnCheck, ...]:
        return tuple(check for check in self.checks if not check.passed)

    def diagnostic(self) -> str | None:
        if not self.found_columns:
            return f"Table definition of {self.table_name} is invalid: 0 columns found"
        problems = [
            problem for check in self.failed_checks() for problem in check.mismatches()
        ]
        if not problems:
            return None
        return (
            f"Table definition of {self.table_name} is invalid: " + "; ".join(problems)
        )


def check_column(expected: ExpectedColumn, found: ColumnInfo | None) -> ColumnCheck:
    if found is None:
        return ColumnCheck(
            expected=expected,
            found=None,
            present=False,
            type_matches=False,
            notnull_matches=False,
            default_matches=False,
        )
    default_matches = (
        expected.has_default is None or expected.has_default == found.has_default
    )
    return ColumnCheck(
        expected=expected,
        found=found,
        present=True,
        # Exact declared type: "VARCHAR" does not satisfy "TEXT".
        type_matches=found.declared_type == expected.declared_type,
        notnull_matches=found.not_null == expected.not_null,
        default_matches=default_matches,
    )


def _first_occurrences(columns: Sequence[ColumnInfo]) -> dict[str, ColumnInfo]:
    # Duplicate names in introspection output: the first occurrence wins.
    by_name: dict[str, ColumnInfo] = {}
    for column in columns:
        by_name.setdefault(column.name, column)
    return by_name


def inspect_columns(
    schema: ExpectedColumnSchema, columns: Sequence[ColumnInfo]
) -> TableDefinitionReport:
    by_name = _first_occurrences(columns)
    checks = tuple(
        check_column(expected, by_name.get(expected.name))
        for expected in schema.columns
    )
    expected_names = set(schema.column_names())
    extra = tuple(name for name in by_name if name not in expected_names)
    return TableDefinitionReport(
        table_name=schema.table_name,
        checks=checks,
        found_columns=tuple(by_name),
        extra_columns=extra,
    )


def inspect_table(
    container: ContainerPort, schema: ExpectedColumnSchema
) -> TableDefinitionReport:
    try:
        columns = container.columns(schema.table_name)
    except TableNotFoundError:
        # Existence is a separate precondition; degrade to "0 columns found".
        columns = ()
    return inspect_columns(schema, columns)


def validate_table(
    container: ContainerPort, schema: ExpectedColumnSchema, *, requirement_id: str
) -> ValidationVerdict:
    report = inspect_table(container, schema)
    if report.passed:
        return ValidationVerdict.passing(requirement_id)
    return ValidationVerdict.failing(
        requirement_id,
        FailureKind.STRUCTURAL_MISMATCH,
        report.diagnostic() or f"Table definition of {schema.table_name} is invalid",
        violation_count=max(len(report.failed_checks()), 1),
    )
