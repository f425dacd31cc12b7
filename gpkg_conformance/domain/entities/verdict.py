from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureKind(str, Enum):
    """Classification of a failed verdict."""

    PRECONDITION_UNMET = "PreconditionUnmet"  # Table/column prerequisite failed
    STRUCTURAL_MISMATCH = "StructuralMismatch"  # Column type/nullability/presence
    CONTENT_VIOLATION = "ContentViolation"  # Row value outside its domain
    CONFIGURATION_FAULT = "ConfigurationFault"  # Class unknown or not enabled
    COLLABORATOR_FAULT = "CollaboratorFault"  # Container read layer raised


@dataclass(frozen=True, slots=True)
class ValidationVerdict:
    requirement_id: str
    passed: bool
    message: str | None = None
    failure: FailureKind | None = None
    class_name: str = ""
    violation_count: int = 0
    samples: tuple[str, ...] = ()

    @classmethod
    def passing(
        cls, requirement_id: str, message: str | None = None
    ) -> ValidationVerdict:
        return cls(requirement_id=requirement_id, passed=True, message=message)

    @classmethod
    def failing(
        cls,
        requirement_id: str,
        failure: FailureKind,
        message: str,
        *,
        violation_count: int = 0,
        samples: tuple[str, ...] = (),
    ) -> ValidationVerdict:
        return cls(
            requirement_id=requirement_id,
            passed=False,
            message=message,
            failure=failure,
            violation_count=violation_count,
            samples=samples,
        )

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"

    def to_dict(self) -> dict[str, object]:
        return {
            "requirement_id": self.requirement_id,
            "class_name": self.class_name,
            "status": self.status,
            "failure": self.failure.value if self.failure else None,
            "message": self.message,
            "violation_count": self.violation_count,
            "samples": list(self.samples),
        }


@dataclass(frozen=True, slots=True)
class RunResult:
    target: str
    verdicts: tuple[ValidationVerdict, ...]
    skipped_classes: tuple[str, ...] = ()
    diagnostics: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.verdicts)

    @property
    def failed(self) -> int:
        return sum(1 for verdict in self.verdicts if not verdict.passed)

    @property
    def passed(self) -> int:
        return self.total - self.failed

    def failures(self) -> tuple[ValidationVerdict, ...]:
        return tuple(verdict for verdict in self.verdicts if not verdict.passed)

    def verdict_for(self, requirement_id: str) -> ValidationVerdict | None:
        for verdict in self.verdicts:
            if verdict.requirement_id == requirement_id:
                return verdict
        return None

    def class_names(self) -> tuple[str, ...]:
        seen: list[str] = []
        for verdict in self.verdicts:
            if verdict.class_name not in seen:
                seen.append(verdict.class_name)
        return tuple(seen)

    def to_dict(self) -> dict[str, object]:
        return {
            "target": self.target,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped_classes": list(self.skipped_classes),
            "diagnostics": list(self.diagnostics),
            "verdicts": [verdict.to_dict() for verdict in self.verdicts],
        }
