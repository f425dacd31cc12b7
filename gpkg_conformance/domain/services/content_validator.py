from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING

from ...exceptions import TableNotFoundError
from ..entities.verdict import FailureKind, ValidationVerdict

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ...application.ports.container import ContainerPort

    ValueCheck = Callable[[object], str | None]

RowCondition = tuple[tuple[str, object], ...]


def _format_value(value: object) -> str:
    return "NULL" if value is None else repr(value)


@dataclass(frozen=True, slots=True)
class EnumeratedValues:
    column: str
    allowed: tuple[object, ...]
    allow_null: bool = False
    when: RowCondition = ()
    key_column: str | None = None

    def prepare(self, container: ContainerPort) -> ValueCheck:
        allowed = frozenset(self.allowed)
        listing = ", ".join(str(value) for value in self.allowed)

        def check(value: object) -> str | None:
            if value in allowed:
                return None
            return f"not one of {{{listing}}}"

        return check


@dataclass(frozen=True, slots=True)
class NumericRange:
    column: str
    minimum: float | None = None
    maximum: float | None = None
    min_inclusive: bool = True
    max_inclusive: bool = True
    allow_null: bool = False
    when: RowCondition = ()
    key_column: str | None = None

    def describe(self) -> str:
        lower = "(-inf" if self.minimum is None else (
            f"{'[' if self.min_inclusive else '('}{self.minimum:g}"
        )
        upper = "+inf)" if self.maximum is None else (
            f"{self.maximum:g}{']' if self.max_inclusive else ')'}"
        )
        return f"{lower}, {upper}"

    def contains(self, value: float) -> bool:
        if self.minimum is not None:
            if value < self.minimum or (not self.min_inclusive and value == self.minimum):
                return False
        if self.maximum is not None:
            if value > self.maximum or (not self.max_inclusive and value == self.maximum):
                return False
        return True

    def prepare(self, container: ContainerPort) -> ValueCheck:
        bounds = self.describe()

        def check(value: object) -> str | None:
            if isinstance(value, bool) or not isinstance(value, Real):
                return "is not numeric"
            if self.contains(float(value)):
                return None
            return f"outside {bounds}"

        return check


@dataclass(frozen=True, slots=True)
class ReferenceExists:
    column: str
    target_table: str
    target_column: str
    allow_null: bool = True
    when: RowCondition = ()
    key_column: str | None = None

    def prepare(self, container: ContainerPort) -> ValueCheck:
        # Only the referenced key column is kept, never the target rows.
        keys = {
            row.get(self.target_column) for row in container.rows(self.target_table)
        }
        target = f"{self.target_table}.{self.target_column}"

        def check(value: object) -> str | None:
            if value in keys:
                return None
            return f"has no match in {target}"

        return check


ContentRule = EnumeratedValues | NumericRange | ReferenceExists


@dataclass(frozen=True, slots=True)
class RowViolation:
    row_number: int
    column: str
    value: object
    reason: str
    key: str | None = None

    def describe(self) -> str:
        where = f"row {self.row_number}"
        if self.key:
            where += f" ({self.key})"
        return f"{where}: {self.column}={_format_value(self.value)} {self.reason}"


@dataclass(frozen=True, slots=True)
class ContentReport:
    table_name: str
    column: str
    rows_checked: int
    violation_count: int
    samples: tuple[RowViolation, ...]

    @property
    def passed(self) -> bool:
        return self.violation_count == 0

    def diagnostic(self) -> str | None:
        if self.passed:
            return None
        first = self.samples[0].describe()
        return (
            f"{self.table_name}.{self.column}: {self.violation_count} violation(s) "
            f"in {self.rows_checked} row(s); first at {first}"
        )


class MissingRuleColumnError(LookupError):
    def __init__(self, table_name: str, column: str) -> None:
        super().__init__(f"Column {column} not found in {table_name}")
        self.table_name = table_name
        self.column = column


def _applies(rule: ContentRule, row: Mapping[str, object]) -> bool:
    return all(row.get(column) == expected for column, expected in rule.when)


def _row_key(rule: ContentRule, row: Mapping[str, object]) -> str | None:
    if rule.key_column is None or rule.key_column not in row:
        return None
    return f"{rule.key_column}={_format_value(row[rule.key_column])}"


def scan_rows(
    container: ContainerPort,
    table_name: str,
    rule: ContentRule,
    *,
    sample_limit: int,
) -> ContentReport:
    """Stream ``table_name`` once and apply ``rule`` to every applicable row.

    Scanning never stops at the first violation: the total count is always
    exact, while at most ``sample_limit`` violations are kept as samples.
    """
    check = rule.prepare(container)
    samples: list[RowViolation] = []
    violations = 0
    rows_checked = 0
    for row_number, row in enumerate(container.rows(table_name), start=1):
        if rule.column not in row:
            raise MissingRuleColumnError(table_name, rule.column)
        if not _applies(rule, row):
            continue
        rows_checked += 1
        value = row[rule.column]
        if value is None:
            reason = None if rule.allow_null else "is not allowed"
        else:
            reason = check(value)
        if reason is None:
            continue
        violations += 1
        if len(samples) < max(sample_limit, 1):
            samples.append(
                RowViolation(
                    row_number=row_number,
                    column=rule.column,
                    value=value,
                    reason=reason,
                    key=_row_key(rule, row),
                )
            )
    return ContentReport(
        table_name=table_name,
        column=rule.column,
        rows_checked=rows_checked,
        violation_count=violations,
        samples=tuple(samples),
    )


def validate_rows(
    container: ContainerPort,
    table_name: str,
    rule: ContentRule,
    *,
    requirement_id: str,
    sample_limit: int = 5,
) -> ValidationVerdict:
    try:
        report = scan_rows(container, table_name, rule, sample_limit=sample_limit)
    except TableNotFoundError as exc:
        return ValidationVerdict.failing(
            requirement_id,
            FailureKind.PRECONDITION_UNMET,
            f"Table {exc.table_name} required by this check does not exist",
        )
    except MissingRuleColumnError as exc:
        return ValidationVerdict.failing(
            requirement_id, FailureKind.STRUCTURAL_MISMATCH, str(exc)
        )
    if report.passed:
        return ValidationVerdict.passing(requirement_id)
    return ValidationVerdict.failing(
        requirement_id,
        FailureKind.CONTENT_VIOLATION,
        report.diagnostic() or "",
        violation_count=report.violation_count,
        samples=tuple(sample.describe() for sample in report.samples),
    )
