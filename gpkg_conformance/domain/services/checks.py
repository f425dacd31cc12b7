"""Requirement predicates.

Each check is a small immutable object that knows which validator to call
and with which arguments. Checks hold no state between evaluations, so
re-evaluating one against an unchanged container gives the same verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..entities.verdict import FailureKind, ValidationVerdict
from .content_validator import validate_rows
from .extension_validator import (
    validate_extension_names,
    validate_extensions_table,
    validate_extra_columns_registered,
    validate_no_redefinition,
    validate_registered_columns,
)
from .structural_validator import validate_table

if TYPE_CHECKING:
    from ...application.ports.container import ContainerPort
    from ..entities.requirement import EvaluationSettings
    from ..entities.schema import ExpectedColumnSchema
    from .content_validator import ContentRule


@dataclass(frozen=True, slots=True)
class TableExistsCheck:
    table_name: str

    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        if container.table_exists(self.table_name):
            return ValidationVerdict.passing(requirement_id)
        return ValidationVerdict.failing(
            requirement_id,
            FailureKind.PRECONDITION_UNMET,
            f"Table or view {self.table_name} does not exist",
        )


@dataclass(frozen=True, slots=True)
class TableDefinitionCheck:
    schema: ExpectedColumnSchema

    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_table(container, self.schema, requirement_id=requirement_id)


@dataclass(frozen=True, slots=True)
class RowRuleCheck:
    table_name: str
    rule: ContentRule

    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_rows(
            container,
            self.table_name,
            self.rule,
            requirement_id=requirement_id,
            sample_limit=settings.sample_limit,
        )


@dataclass(frozen=True, slots=True)
class RequiredRowsCheck:
    table_name: str
    key_column: str
    keys: tuple[object, ...]

    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        missing = list(self.keys)
        for row in container.rows(self.table_name):
            if not missing:
                break
            value = row.get(self.key_column)
            if value in missing:
                missing.remove(value)
        if not missing:
            return ValidationVerdict.passing(requirement_id)
        listing = ", ".join(str(key) for key in missing)
        return ValidationVerdict.failing(
            requirement_id,
            FailureKind.CONTENT_VIOLATION,
            f"{self.table_name} has no row with {self.key_column} in {{{listing}}}",
            violation_count=len(missing),
        )


@dataclass(frozen=True, slots=True)
class ExtensionsTableCheck:
    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_extensions_table(container, requirement_id=requirement_id)


@dataclass(frozen=True, slots=True)
class NoRedefinitionCheck:
    standard_schemas: tuple[ExpectedColumnSchema, ...]

    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_no_redefinition(
            container,
            self.standard_schemas,
            requirement_id=requirement_id,
            allowed_extensions=settings.allowed_value_extensions,
            sample_limit=settings.sample_limit,
        )


@dataclass(frozen=True, slots=True)
class ExtraColumnsRegisteredCheck:
    standard_schemas: tuple[ExpectedColumnSchema, ...]

    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_extra_columns_registered(
            container,
            self.standard_schemas,
            requirement_id=requirement_id,
            sample_limit=settings.sample_limit,
        )


@dataclass(frozen=True, slots=True)
class RegisteredColumnsCheck:
    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_registered_columns(
            container, requirement_id=requirement_id, sample_limit=settings.sample_limit
        )


@dataclass(frozen=True, slots=True)
class ExtensionNameCheck:
    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict:
        return validate_extension_names(
            container, requirement_id=requirement_id, sample_limit=settings.sample_limit
        )
