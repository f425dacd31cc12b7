from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class TestRunRequest:
    """Run configuration: the container to open and the classes to enable.

    ``inclusion_set`` is ``None`` when the run configuration names no
    classes at all, which is distinct from an empty set.
    """

    __test__ = False

    container_path: Path
    inclusion_set: frozenset[str] | None = None

