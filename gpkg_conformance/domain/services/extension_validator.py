"""Extension mechanism checks for the ``gpkg_extensions`` registry.

The registry's table definition is checked with the structural validator
against a fixed schema. The remaining checks read registry rows: extensions
may add tables, columns and values, but a registry row that names a column
of a standard table claims to redefine it, which is a content violation
unless the extension is documented as only allowing new values.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from ...constants import TableNames
from ...exceptions import TableNotFoundError
from ..entities.schema import ExpectedColumn, ExpectedColumnSchema
from ..entities.verdict import FailureKind, ValidationVerdict
from .structural_validator import inspect_table, validate_table

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from ...application.ports.container import ContainerPort

EXTENSIONS_SCHEMA = ExpectedColumnSchema(
    table_name=TableNames.EXTENSIONS,
    columns=(
        ExpectedColumn("table_name", "TEXT", not_null=False),
        ExpectedColumn("column_name", "TEXT", not_null=False),
        ExpectedColumn("extension_name", "TEXT", not_null=True),
        ExpectedColumn("definition", "TEXT", not_null=True),
        ExpectedColumn("scope", "TEXT", not_null=True),
    ),
)

EXTENSION_SCOPES = ("read-write", "write-only")

EXTENDED_GEOMETRY_TYPES = (
    "CIRCULARSTRING",
    "COMPOUNDCURVE",
    "CURVEPOLYGON",
    "MULTICURVE",
    "MULTISURFACE",
    "CURVE",
    "SURFACE",
)

STANDARD_EXTENSIONS = frozenset(
    {
        "gpkg_rtree_index",
        "gpkg_zoom_other",
        "gpkg_webp",
        "gpkg_metadata",
        "gpkg_schema",
        "gpkg_crs_wkt",
        "gpkg_elevation_tiles",
        "gpkg_2d_gridded_coverage",
        *(f"gpkg_geom_{name}" for name in EXTENDED_GEOMETRY_TYPES),
    }
)

_AUTHORED_NAME = re.compile(r"^[A-Za-z0-9]+_[A-Za-z0-9_]+$")


@dataclass(frozen=True, slots=True)
class ExtensionRow:
    row_number: int
    table_name: str | None
    column_name: str | None
    extension_name: str | None
    scope: str | None

    @classmethod
    def from_row(cls, row_number: int, row: Mapping[str, object]) -> ExtensionRow:
        def text(key: str) -> str | None:
            value = row.get(key)
            return None if value is None else str(value)

        return cls(
            row_number=row_number,
            table_name=text("table_name"),
            column_name=text("column_name"),
            extension_name=text("extension_name"),
            scope=text("scope"),
        )

    def describe(self) -> str:
        return (
            f"row {self.row_number} (extension_name={self.extension_name!r}, "
            f"table_name={self.table_name!r}, column_name={self.column_name!r})"
        )


def iter_extension_rows(container: ContainerPort) -> Iterator[ExtensionRow]:
    for row_number, row in enumerate(container.rows(TableNames.EXTENSIONS), start=1):
        yield ExtensionRow.from_row(row_number, row)


def is_valid_extension_name(name: str | None) -> bool:
    if not name:
        return False
    if name.startswith("gpkg_"):
        return name in STANDARD_EXTENSIONS
    return bool(_AUTHORED_NAME.match(name))


def validate_extensions_table(
    container: ContainerPort, *, requirement_id: str
) -> ValidationVerdict:
    return validate_table(container, EXTENSIONS_SCHEMA, requirement_id=requirement_id)


def _missing_registry_columns(
    container: ContainerPort, required: Iterable[str], *, requirement_id: str
) -> ValidationVerdict | None:
    present = {column.name for column in container.columns(TableNames.EXTENSIONS)}
    missing = [name for name in required if name not in present]
    if not missing:
        return None
    return ValidationVerdict.failing(
        requirement_id,
        FailureKind.STRUCTURAL_MISMATCH,
        f"{TableNames.EXTENSIONS} has no column(s) {', '.join(missing)} "
        "needed to check registry rows",
    )


def _fail_with_rows(
    requirement_id: str, headline: str, offending: list[str], sample_limit: int
) -> ValidationVerdict:
    return ValidationVerdict.failing(
        requirement_id,
        FailureKind.CONTENT_VIOLATION,
        f"{headline}: {len(offending)} row(s); first at {offending[0]}",
        violation_count=len(offending),
        samples=tuple(offending[: max(sample_limit, 1)]),
    )


def validate_no_redefinition(
    container: ContainerPort,
    standard_schemas: Iterable[ExpectedColumnSchema],
    *,
    requirement_id: str,
    allowed_extensions: frozenset[str] = frozenset(),
    sample_limit: int = 5,
) -> ValidationVerdict:
    """No registry row may name a column defined by a standard table."""
    if mismatch := _missing_registry_columns(
        container,
        ("table_name", "column_name", "extension_name"),
        requirement_id=requirement_id,
    ):
        return mismatch
    standard_columns = {
        (schema.table_name, name)
        for schema in standard_schemas
        for name in schema.column_names()
    }
    offending: list[str] = []
    for row in iter_extension_rows(container):
        if row.table_name is None or row.column_name is None:
            continue
        if (row.table_name, row.column_name) not in standard_columns:
            continue
        if row.extension_name in allowed_extensions:
            continue
        offending.append(
            f"{row.describe()} redefines standard column "
            f"{row.table_name}.{row.column_name}"
        )
    if not offending:
        return ValidationVerdict.passing(requirement_id)
    return _fail_with_rows(
        requirement_id,
        "Extensions modify existing standard columns",
        offending,
        sample_limit,
    )


def validate_extension_names(
    container: ContainerPort, *, requirement_id: str, sample_limit: int = 5
) -> ValidationVerdict:
    if mismatch := _missing_registry_columns(
        container, ("extension_name",), requirement_id=requirement_id
    ):
        return mismatch
    offending = [
        f"{row.describe()} has invalid extension_name"
        for row in iter_extension_rows(container)
        if not is_valid_extension_name(row.extension_name)
    ]
    if not offending:
        return ValidationVerdict.passing(requirement_id)
    return _fail_with_rows(
        requirement_id, "Invalid extension names", offending, sample_limit
    )


def validate_registered_columns(
    container: ContainerPort, *, requirement_id: str, sample_limit: int = 5
) -> ValidationVerdict:
    """Every registered (table_name, column_name) pair names a real column."""
    if mismatch := _missing_registry_columns(
        container, ("table_name", "column_name"), requirement_id=requirement_id
    ):
        return mismatch
    known: dict[str, frozenset[str] | None] = {}
    offending: list[str] = []
    for row in iter_extension_rows(container):
        if row.table_name is None or row.column_name is None:
            continue
        if row.table_name not in known:
            try:
                columns = container.columns(row.table_name)
            except TableNotFoundError:
                known[row.table_name] = None
            else:
                known[row.table_name] = frozenset(column.name for column in columns)
        names = known[row.table_name]
        if names is None:
            offending.append(f"{row.describe()} names a missing table")
        elif row.column_name not in names:
            offending.append(f"{row.describe()} names a missing column")
    if not offending:
        return ValidationVerdict.passing(requirement_id)
    return _fail_with_rows(
        requirement_id, "Registered columns do not exist", offending, sample_limit
    )


def validate_extra_columns_registered(
    container: ContainerPort,
    standard_schemas: Iterable[ExpectedColumnSchema],
    *,
    requirement_id: str,
    sample_limit: int = 5,
) -> ValidationVerdict:
    """Columns added to standard tables must be registered as extensions."""
    if mismatch := _missing_registry_columns(
        container, ("table_name", "column_name"), requirement_id=requirement_id
    ):
        return mismatch
    registered = {
        (row.table_name, row.column_name)
        for row in iter_extension_rows(container)
        if row.table_name is not None and row.column_name is not None
    }
    offending: list[str] = []
    for schema in standard_schemas:
        if not container.table_exists(schema.table_name):
            continue
        report = inspect_table(container, schema)
        for name in report.extra_columns:
            if (schema.table_name, name) not in registered:
                offending.append(f"{schema.table_name}.{name}")
    if not offending:
        return ValidationVerdict.passing(requirement_id)
    return ValidationVerdict.failing(
        requirement_id,
        FailureKind.CONTENT_VIOLATION,
        f"{len(offending)} column(s) added to standard tables are not registered "
        f"in {TableNames.EXTENSIONS}: {', '.join(offending)}",
        violation_count=len(offending),
        samples=tuple(offending[: max(sample_limit, 1)]),
    )
