"""Domain services: class selection, validators and requirement checks."""

from .class_selector import (
    ClassSelection,
    is_enabled,
    parse_inclusion_set,
    select_classes,
)
from .content_validator import (
    ContentRule,
    EnumeratedValues,
    NumericRange,
    ReferenceExists,
    validate_rows,
)
from .extension_validator import (
    EXTENSIONS_SCHEMA,
    validate_extensions_table,
    validate_no_redefinition,
)
from .structural_validator import inspect_table, validate_table

__all__ = [
    "ClassSelection",
    "ContentRule",
    "EXTENSIONS_SCHEMA",
    "EnumeratedValues",
    "NumericRange",
    "ReferenceExists",
    "inspect_table",
    "is_enabled",
    "parse_inclusion_set",
    "select_classes",
    "validate_extensions_table",
    "validate_no_redefinition",
    "validate_rows",
    "validate_table",
]
