from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from collections.abc import Set as AbstractSet

    from ..entities.conformance_class import ConformanceClass

NOT_ENABLED_MESSAGE = "Conformance class {name} is not enabled"
UNKNOWN_CLASS_MESSAGE = "Unknown conformance class '{name}' in inclusion set"


def is_enabled(class_name: str, inclusion_set: AbstractSet[str] | None) -> bool:
    # Exact match only: no prefix or case folding.
    return inclusion_set is not None and class_name in inclusion_set


def parse_inclusion_set(raw: str | Iterable[str] | None) -> frozenset[str] | None:
    if raw is None:
        return None
    tokens = raw.split(",") if isinstance(raw, str) else list(raw)
    return frozenset(token.strip() for token in tokens if token.strip())


@dataclass(frozen=True, slots=True)
class ClassSelection:
    enabled: tuple[ConformanceClass, ...]
    not_enabled: tuple[ConformanceClass, ...]
    skipped: tuple[ConformanceClass, ...]
    unknown_names: tuple[str, ...]

    def diagnostics(self) -> tuple[str, ...]:
        return tuple(UNKNOWN_CLASS_MESSAGE.format(name=name) for name in self.unknown_names)


def select_classes(
    catalog: Sequence[ConformanceClass], inclusion_set: AbstractSet[str] | None
) -> ClassSelection:
    """Resolve an inclusion set against the catalog.

    Gated classes that are not enabled land in ``not_enabled`` and fail fast;
    ungated ones land in ``skipped``. Unknown names are kept, sorted, for
    diagnostics only.
    """
    enabled: list[ConformanceClass] = []
    not_enabled: list[ConformanceClass] = []
    skipped: list[ConformanceClass] = []
    for conformance_class in catalog:
        if is_enabled(conformance_class.name, inclusion_set):
            enabled.append(conformance_class)
        elif conformance_class.gated:
            not_enabled.append(conformance_class)
        else:
            skipped.append(conformance_class)
    known = {conformance_class.name for conformance_class in catalog}
    unknown = sorted(name for name in (inclusion_set or ()) if name not in known)
    return ClassSelection(
        enabled=tuple(enabled),
        not_enabled=tuple(not_enabled),
        skipped=tuple(skipped),
        unknown_names=tuple(unknown),
    )
