from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .requirement import Requirement


@dataclass(frozen=True, slots=True)
class ConformanceClass:
    name: str
    requirements: tuple[Requirement, ...]
    gated: bool = False
    description: str = ""

    def requirement_ids(self) -> tuple[str, ...]:
        return tuple(requirement.id for requirement in self.requirements)
