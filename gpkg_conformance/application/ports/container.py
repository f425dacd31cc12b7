from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from ...domain.entities.schema import ColumnInfo


@runtime_checkable
class ContainerPort(Protocol):
    """Read-only view of a container under test.

    ``columns`` and ``rows`` raise ``TableNotFoundError`` for an absent table
    so callers can tell "table absent" from "table present but empty".
    """

    @property
    def locator(self) -> str: ...

    def table_exists(self, table_name: str) -> bool: ...

    def columns(self, table_name: str) -> Sequence[ColumnInfo]: ...

    def rows(self, table_name: str) -> Iterator[Mapping[str, object]]: ...
