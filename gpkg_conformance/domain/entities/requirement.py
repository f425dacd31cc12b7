from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from ...application.ports.container import ContainerPort
    from .verdict import ValidationVerdict

Severity = Literal["error"]


@dataclass(frozen=True, slots=True)
class EvaluationSettings:
    sample_limit: int = 5
    allowed_value_extensions: frozenset[str] = frozenset()


class RequirementCheck(Protocol):
    def evaluate(
        self,
        container: ContainerPort,
        *,
        requirement_id: str,
        settings: EvaluationSettings,
    ) -> ValidationVerdict: ...


@dataclass(frozen=True, slots=True)
class Requirement:
    """A single normative rule and the predicate that verifies it.

    ``requires`` names earlier Requirements of the same class whose failure
    makes this one fail by association instead of being evaluated.
    """

    id: str
    description: str
    check: RequirementCheck
    requires: tuple[str, ...] = ()
    severity: Severity = "error"

    def evaluate(
        self, container: ContainerPort, settings: EvaluationSettings
    ) -> ValidationVerdict:
        return self.check.evaluate(
            container, requirement_id=self.id, settings=settings
        )
