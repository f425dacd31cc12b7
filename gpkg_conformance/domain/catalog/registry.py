"""The conformance class catalog.

Classes appear in evaluation order and each lists its requirements in the
order they run. A table's ``<table>:exists`` requirement precedes every
requirement that reads the table, so a missing table fails its dependents
by association instead of producing one collaborator fault per check.
"""

from __future__ import annotations

from functools import cache

from ...constants import ClassNames, TableNames
from ...exceptions import CatalogError
from ..entities.conformance_class import ConformanceClass
from ..entities.requirement import Requirement
from ..services.checks import (
    ExtensionNameCheck,
    ExtensionsTableCheck,
    ExtraColumnsRegisteredCheck,
    NoRedefinitionCheck,
    RegisteredColumnsCheck,
    RequiredRowsCheck,
    RowRuleCheck,
    TableDefinitionCheck,
    TableExistsCheck,
)
from ..services.content_validator import EnumeratedValues, NumericRange, ReferenceExists
from ..services.extension_validator import EXTENDED_GEOMETRY_TYPES, EXTENSION_SCOPES
from . import standard_tables as tables


def exists_id(table_name: str) -> str:
    return f"{table_name}:exists"


def _exists(table_name: str) -> Requirement:
    return Requirement(
        id=exists_id(table_name),
        description=f"The {table_name} table or view exists",
        check=TableExistsCheck(table_name),
    )


def _requires(*table_names: str) -> tuple[str, ...]:
    return tuple(exists_id(name) for name in table_names)


def _core() -> ConformanceClass:
    srs = TableNames.SPATIAL_REF_SYS
    contents = TableNames.CONTENTS
    return ConformanceClass(
        name=ClassNames.CORE,
        description="Spatial reference systems and the contents table",
        requirements=(
            _exists(srs),
            Requirement(
                "R10",
                f"The {srs} table matches the standard definition",
                TableDefinitionCheck(tables.SPATIAL_REF_SYS),
                requires=_requires(srs),
            ),
            Requirement(
                "R11",
                f"{srs} contains the default definitions for srs_id -1, 0 and 4326",
                RequiredRowsCheck(srs, "srs_id", tables.DEFAULT_SRS_IDS),
                requires=_requires(srs),
            ),
            _exists(contents),
            Requirement(
                "R13",
                f"The {contents} table matches the standard definition",
                TableDefinitionCheck(tables.CONTENTS),
                requires=_requires(contents),
            ),
            Requirement(
                "R14",
                f"{contents}.table_name names a table or view in the container",
                RowRuleCheck(
                    contents,
                    ReferenceExists(
                        "table_name",
                        TableNames.SQLITE_MASTER,
                        "name",
                        allow_null=False,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(contents),
            ),
            Requirement(
                "R16",
                f"{contents}.srs_id references {srs}.srs_id",
                RowRuleCheck(
                    contents,
                    ReferenceExists("srs_id", srs, "srs_id", key_column="table_name"),
                ),
                requires=_requires(srs, contents),
            ),
            Requirement(
                "R17",
                f"{contents}.data_type is a known data type",
                RowRuleCheck(
                    contents,
                    EnumeratedValues(
                        "data_type", tables.DATA_TYPES, key_column="table_name"
                    ),
                ),
                requires=_requires(contents),
            ),
        ),
    )


def _features() -> ConformanceClass:
    geometry = TableNames.GEOMETRY_COLUMNS
    return ConformanceClass(
        name=ClassNames.FEATURES,
        description="Vector feature geometry columns",
        requirements=(
            _exists(geometry),
            Requirement(
                "R21",
                f"The {geometry} table matches the standard definition",
                TableDefinitionCheck(tables.GEOMETRY_COLUMNS),
                requires=_requires(geometry),
            ),
            Requirement(
                "R23",
                f"{geometry}.table_name references {TableNames.CONTENTS}.table_name",
                RowRuleCheck(
                    geometry,
                    ReferenceExists(
                        "table_name",
                        TableNames.CONTENTS,
                        "table_name",
                        allow_null=False,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(geometry),
            ),
            Requirement(
                "R25",
                f"{geometry}.geometry_type_name is a known geometry type",
                RowRuleCheck(
                    geometry,
                    EnumeratedValues(
                        "geometry_type_name",
                        tables.GEOMETRY_TYPES + EXTENDED_GEOMETRY_TYPES,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(geometry),
            ),
            Requirement(
                "R26",
                f"{geometry}.srs_id references {TableNames.SPATIAL_REF_SYS}.srs_id",
                RowRuleCheck(
                    geometry,
                    ReferenceExists(
                        "srs_id",
                        TableNames.SPATIAL_REF_SYS,
                        "srs_id",
                        allow_null=False,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(geometry),
            ),
            Requirement(
                "R27",
                f"{geometry}.z is 0, 1 or 2",
                RowRuleCheck(
                    geometry, EnumeratedValues("z", (0, 1, 2), key_column="table_name")
                ),
                requires=_requires(geometry),
            ),
            Requirement(
                "R28",
                f"{geometry}.m is 0, 1 or 2",
                RowRuleCheck(
                    geometry, EnumeratedValues("m", (0, 1, 2), key_column="table_name")
                ),
                requires=_requires(geometry),
            ),
        ),
    )


def _positive(requirement_id: str, column: str) -> Requirement:
    matrix = TableNames.TILE_MATRIX
    return Requirement(
        requirement_id,
        f"{matrix}.{column} is greater than 0",
        RowRuleCheck(
            matrix,
            NumericRange(
                column, minimum=0, min_inclusive=False, key_column="table_name"
            ),
        ),
        requires=_requires(matrix),
    )


def _tiles() -> ConformanceClass:
    matrix_set = TableNames.TILE_MATRIX_SET
    matrix = TableNames.TILE_MATRIX
    return ConformanceClass(
        name=ClassNames.TILES,
        description="Tile pyramid user data tables",
        requirements=(
            _exists(matrix_set),
            Requirement(
                "R38",
                f"The {matrix_set} table matches the standard definition",
                TableDefinitionCheck(tables.TILE_MATRIX_SET),
                requires=_requires(matrix_set),
            ),
            Requirement(
                "R39",
                f"{matrix_set}.table_name references {TableNames.CONTENTS}.table_name",
                RowRuleCheck(
                    matrix_set,
                    ReferenceExists(
                        "table_name",
                        TableNames.CONTENTS,
                        "table_name",
                        allow_null=False,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(matrix_set),
            ),
            Requirement(
                "R41",
                f"{matrix_set}.srs_id references {TableNames.SPATIAL_REF_SYS}.srs_id",
                RowRuleCheck(
                    matrix_set,
                    ReferenceExists(
                        "srs_id",
                        TableNames.SPATIAL_REF_SYS,
                        "srs_id",
                        allow_null=False,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(matrix_set),
            ),
            _exists(matrix),
            Requirement(
                "R42",
                f"The {matrix} table matches the standard definition",
                TableDefinitionCheck(tables.TILE_MATRIX),
                requires=_requires(matrix),
            ),
            Requirement(
                "R43",
                f"{matrix}.table_name references {TableNames.CONTENTS}.table_name",
                RowRuleCheck(
                    matrix,
                    ReferenceExists(
                        "table_name",
                        TableNames.CONTENTS,
                        "table_name",
                        allow_null=False,
                        key_column="table_name",
                    ),
                ),
                requires=_requires(matrix),
            ),
            Requirement(
                "R46",
                f"{matrix}.zoom_level is not negative",
                RowRuleCheck(
                    matrix,
                    NumericRange("zoom_level", minimum=0, key_column="table_name"),
                ),
                requires=_requires(matrix),
            ),
            _positive("R47", "matrix_width"),
            _positive("R48", "matrix_height"),
            _positive("R49", "tile_width"),
            _positive("R50", "tile_height"),
            _positive("R51", "pixel_x_size"),
            _positive("R52", "pixel_y_size"),
        ),
    )


def _extension_mechanism() -> ConformanceClass:
    extensions = TableNames.EXTENSIONS
    return ConformanceClass(
        name=ClassNames.EXTENSION_MECHANISM,
        gated=True,
        description="The gpkg_extensions registry",
        requirements=(
            _exists(extensions),
            Requirement(
                "R58",
                f"The {extensions} table matches the standard definition",
                ExtensionsTableCheck(),
                requires=_requires(extensions),
            ),
            Requirement(
                "R58a",
                "Extensions do not redefine columns of standard tables",
                NoRedefinitionCheck(tables.STANDARD_SCHEMAS),
                requires=_requires(extensions),
            ),
            Requirement(
                "R59",
                "Columns added to standard tables are registered as extensions",
                ExtraColumnsRegisteredCheck(tables.STANDARD_SCHEMAS),
                requires=_requires(extensions),
            ),
            Requirement(
                "R60",
                f"{extensions}.table_name names a table or view in the container",
                RowRuleCheck(
                    extensions,
                    ReferenceExists(
                        "table_name",
                        TableNames.SQLITE_MASTER,
                        "name",
                        key_column="extension_name",
                    ),
                ),
                requires=_requires(extensions),
            ),
            Requirement(
                "R61",
                f"{extensions}.column_name names a column of table_name",
                RegisteredColumnsCheck(),
                requires=_requires(extensions),
            ),
            Requirement(
                "R62",
                f"{extensions}.extension_name is <author>_<extension>",
                ExtensionNameCheck(),
                requires=_requires(extensions),
            ),
            Requirement(
                "R64",
                f"{extensions}.scope is read-write or write-only",
                RowRuleCheck(
                    extensions,
                    EnumeratedValues(
                        "scope", EXTENSION_SCOPES, key_column="extension_name"
                    ),
                ),
                requires=_requires(extensions),
            ),
        ),
    )


def _schema() -> ConformanceClass:
    data_columns = TableNames.DATA_COLUMNS
    constraints = TableNames.DATA_COLUMN_CONSTRAINTS
    range_rows = (("constraint_type", "range"),)
    return ConformanceClass(
        name=ClassNames.SCHEMA,
        gated=True,
        description="Column descriptions and value constraints",
        requirements=(
            _exists(data_columns),
            Requirement(
                "R103",
                f"The {data_columns} table matches the standard definition",
                TableDefinitionCheck(tables.DATA_COLUMNS),
                requires=_requires(data_columns),
            ),
            Requirement(
                "R104",
                f"{data_columns}.table_name references {TableNames.CONTENTS}.table_name",
                RowRuleCheck(
                    data_columns,
                    ReferenceExists(
                        "table_name",
                        TableNames.CONTENTS,
                        "table_name",
                        allow_null=False,
                        key_column="column_name",
                    ),
                ),
                requires=_requires(data_columns),
            ),
            _exists(constraints),
            Requirement(
                "R106",
                f"{data_columns}.constraint_name references {constraints}.constraint_name",
                RowRuleCheck(
                    data_columns,
                    ReferenceExists(
                        "constraint_name",
                        constraints,
                        "constraint_name",
                        key_column="column_name",
                    ),
                ),
                requires=_requires(data_columns, constraints),
            ),
            Requirement(
                "R107",
                f"The {constraints} table matches the standard definition",
                TableDefinitionCheck(tables.DATA_COLUMN_CONSTRAINTS),
                requires=_requires(constraints),
            ),
            Requirement(
                "R108",
                f"{constraints}.constraint_type is range, enum or glob",
                RowRuleCheck(
                    constraints,
                    EnumeratedValues(
                        "constraint_type",
                        tables.CONSTRAINT_TYPES,
                        key_column="constraint_name",
                    ),
                ),
                requires=_requires(constraints),
            ),
            Requirement(
                "R112",
                f"{constraints}.min_is_inclusive is 0 or 1 for range constraints",
                RowRuleCheck(
                    constraints,
                    EnumeratedValues(
                        "min_is_inclusive",
                        (0, 1),
                        allow_null=True,
                        when=range_rows,
                        key_column="constraint_name",
                    ),
                ),
                requires=_requires(constraints),
            ),
            Requirement(
                "R113",
                f"{constraints}.max_is_inclusive is 0 or 1 for range constraints",
                RowRuleCheck(
                    constraints,
                    EnumeratedValues(
                        "max_is_inclusive",
                        (0, 1),
                        allow_null=True,
                        when=range_rows,
                        key_column="constraint_name",
                    ),
                ),
                requires=_requires(constraints),
            ),
        ),
    )


def _metadata() -> ConformanceClass:
    metadata = TableNames.METADATA
    reference = TableNames.METADATA_REFERENCE
    return ConformanceClass(
        name=ClassNames.METADATA,
        gated=True,
        description="Metadata documents and their references",
        requirements=(
            _exists(metadata),
            Requirement(
                "R93",
                f"The {metadata} table matches the standard definition",
                TableDefinitionCheck(tables.METADATA),
                requires=_requires(metadata),
            ),
            Requirement(
                "R94",
                f"{metadata}.md_scope is a known metadata scope",
                RowRuleCheck(
                    metadata,
                    EnumeratedValues("md_scope", tables.MD_SCOPES, key_column="id"),
                ),
                requires=_requires(metadata),
            ),
            _exists(reference),
            Requirement(
                "R95",
                f"The {reference} table matches the standard definition",
                TableDefinitionCheck(tables.METADATA_REFERENCE),
                requires=_requires(reference),
            ),
            Requirement(
                "R96",
                f"{reference}.reference_scope is a known reference scope",
                RowRuleCheck(
                    reference,
                    EnumeratedValues(
                        "reference_scope",
                        tables.REFERENCE_SCOPES,
                        key_column="md_file_id",
                    ),
                ),
                requires=_requires(reference),
            ),
            Requirement(
                "R100",
                f"{reference}.md_file_id references {metadata}.id",
                RowRuleCheck(
                    reference,
                    ReferenceExists(
                        "md_file_id",
                        metadata,
                        "id",
                        allow_null=False,
                        key_column="reference_scope",
                    ),
                ),
                requires=_requires(metadata, reference),
            ),
            Requirement(
                "R101",
                f"{reference}.md_parent_id references {metadata}.id",
                RowRuleCheck(
                    reference,
                    ReferenceExists(
                        "md_parent_id",
                        metadata,
                        "id",
                        key_column="md_file_id",
                    ),
                ),
                requires=_requires(metadata, reference),
            ),
        ),
    )


def validate_catalog(catalog: tuple[ConformanceClass, ...]) -> None:
    """Raise ``CatalogError`` unless ids are unique and preconditions resolve."""
    class_names: set[str] = set()
    requirement_ids: set[str] = set()
    for conformance_class in catalog:
        if conformance_class.name in class_names:
            raise CatalogError(
                f"Duplicate conformance class name: {conformance_class.name}"
            )
        class_names.add(conformance_class.name)
        earlier: set[str] = set()
        for requirement in conformance_class.requirements:
            if requirement.id in requirement_ids:
                raise CatalogError(f"Duplicate requirement id: {requirement.id}")
            for dependency in requirement.requires:
                if dependency not in earlier:
                    raise CatalogError(
                        f"Requirement {requirement.id} in {conformance_class.name} "
                        f"requires {dependency}, which is not an earlier requirement "
                        "of the same class"
                    )
            requirement_ids.add(requirement.id)
            earlier.add(requirement.id)


def build_catalog() -> tuple[ConformanceClass, ...]:
    catalog = (
        _core(),
        _features(),
        _tiles(),
        _extension_mechanism(),
        _schema(),
        _metadata(),
    )
    validate_catalog(catalog)
    return catalog


@cache
def get_catalog() -> tuple[ConformanceClass, ...]:
    return build_catalog()


def find_class(name: str) -> ConformanceClass | None:
    for conformance_class in get_catalog():
        if conformance_class.name == name:
            return conformance_class
    return None
