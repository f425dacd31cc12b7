"""Domain entities.

Core domain objects: requirements, conformance classes, expected table
schemas and verdicts.
"""

from .conformance_class import ConformanceClass
from .requirement import EvaluationSettings, Requirement, RequirementCheck, Severity
from .schema import ColumnInfo, ExpectedColumn, ExpectedColumnSchema
from .verdict import FailureKind, RunResult, ValidationVerdict

__all__ = [
    # Catalog entities
    "ConformanceClass",
    "EvaluationSettings",
    "Requirement",
    "RequirementCheck",
    "Severity",
    # Schema entities
    "ColumnInfo",
    "ExpectedColumn",
    "ExpectedColumnSchema",
    # Results
    "FailureKind",
    "RunResult",
    "ValidationVerdict",
]
