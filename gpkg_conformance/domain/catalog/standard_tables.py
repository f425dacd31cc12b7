"""Expected definitions of the standard GeoPackage tables.

Columns added by registered extensions (for example ``definition_12_063``
from ``gpkg_crs_wkt``) are deliberately absent: only the columns defined by
the core standard and the schema/metadata extensions are listed.
"""

from ...constants import TableNames
from ..entities.schema import ExpectedColumn, ExpectedColumnSchema
from ..services.extension_validator import EXTENSIONS_SCHEMA

SPATIAL_REF_SYS = ExpectedColumnSchema(
    table_name=TableNames.SPATIAL_REF_SYS,
    columns=(
        ExpectedColumn("srs_name", "TEXT", not_null=True),
        ExpectedColumn("srs_id", "INTEGER", not_null=True),
        ExpectedColumn("organization", "TEXT", not_null=True),
        ExpectedColumn("organization_coordsys_id", "INTEGER", not_null=True),
        ExpectedColumn("definition", "TEXT", not_null=True),
        ExpectedColumn("description", "TEXT", not_null=False),
    ),
)

CONTENTS = ExpectedColumnSchema(
    table_name=TableNames.CONTENTS,
    columns=(
        ExpectedColumn("table_name", "TEXT", not_null=True),
        ExpectedColumn("data_type", "TEXT", not_null=True),
        ExpectedColumn("identifier", "TEXT", not_null=False),
        ExpectedColumn("description", "TEXT", not_null=False, has_default=True),
        ExpectedColumn("last_change", "DATETIME", not_null=True, has_default=True),
        ExpectedColumn("min_x", "DOUBLE", not_null=False),
        ExpectedColumn("min_y", "DOUBLE", not_null=False),
        ExpectedColumn("max_x", "DOUBLE", not_null=False),
        ExpectedColumn("max_y", "DOUBLE", not_null=False),
        ExpectedColumn("srs_id", "INTEGER", not_null=False),
    ),
)

GEOMETRY_COLUMNS = ExpectedColumnSchema(
    table_name=TableNames.GEOMETRY_COLUMNS,
    columns=(
        ExpectedColumn("table_name", "TEXT", not_null=True),
        ExpectedColumn("column_name", "TEXT", not_null=True),
        ExpectedColumn("geometry_type_name", "TEXT", not_null=True),
        ExpectedColumn("srs_id", "INTEGER", not_null=True),
        ExpectedColumn("z", "TINYINT", not_null=True),
        ExpectedColumn("m", "TINYINT", not_null=True),
    ),
)

TILE_MATRIX_SET = ExpectedColumnSchema(
    table_name=TableNames.TILE_MATRIX_SET,
    columns=(
        ExpectedColumn("table_name", "TEXT", not_null=True),
        ExpectedColumn("srs_id", "INTEGER", not_null=True),
        ExpectedColumn("min_x", "DOUBLE", not_null=True),
        ExpectedColumn("min_y", "DOUBLE", not_null=True),
        ExpectedColumn("max_x", "DOUBLE", not_null=True),
        ExpectedColumn("max_y", "DOUBLE", not_null=True),
    ),
)

TILE_MATRIX = ExpectedColumnSchema(
    table_name=TableNames.TILE_MATRIX,
    columns=(
        ExpectedColumn("table_name", "TEXT", not_null=True),
        ExpectedColumn("zoom_level", "INTEGER", not_null=True),
        ExpectedColumn("matrix_width", "INTEGER", not_null=True),
        ExpectedColumn("matrix_height", "INTEGER", not_null=True),
        ExpectedColumn("tile_width", "INTEGER", not_null=True),
        ExpectedColumn("tile_height", "INTEGER", not_null=True),
        ExpectedColumn("pixel_x_size", "DOUBLE", not_null=True),
        ExpectedColumn("pixel_y_size", "DOUBLE", not_null=True),
    ),
)

DATA_COLUMNS = ExpectedColumnSchema(
    table_name=TableNames.DATA_COLUMNS,
    columns=(
        ExpectedColumn("table_name", "TEXT", not_null=True),
        ExpectedColumn("column_name", "TEXT", not_null=True),
        ExpectedColumn("name", "TEXT", not_null=False),
        ExpectedColumn("title", "TEXT", not_null=False),
        ExpectedColumn("description", "TEXT", not_null=False),
        ExpectedColumn("mime_type", "TEXT", not_null=False),
        ExpectedColumn("constraint_name", "TEXT", not_null=False),
    ),
)

DATA_COLUMN_CONSTRAINTS = ExpectedColumnSchema(
    table_name=TableNames.DATA_COLUMN_CONSTRAINTS,
    columns=(
        ExpectedColumn("constraint_name", "TEXT", not_null=True),
        ExpectedColumn("constraint_type", "TEXT", not_null=True),
        ExpectedColumn("value", "TEXT", not_null=False),
        ExpectedColumn("min", "NUMERIC", not_null=False),
        ExpectedColumn("min_is_inclusive", "BOOLEAN", not_null=False),
        ExpectedColumn("max", "NUMERIC", not_null=False),
        ExpectedColumn("max_is_inclusive", "BOOLEAN", not_null=False),
        ExpectedColumn("description", "TEXT", not_null=False),
    ),
)

METADATA = ExpectedColumnSchema(
    table_name=TableNames.METADATA,
    columns=(
        ExpectedColumn("id", "INTEGER", not_null=True),
        ExpectedColumn("md_scope", "TEXT", not_null=True, has_default=True),
        ExpectedColumn("md_standard_uri", "TEXT", not_null=True),
        ExpectedColumn("mime_type", "TEXT", not_null=True, has_default=True),
        ExpectedColumn("metadata", "TEXT", not_null=True, has_default=True),
    ),
)

METADATA_REFERENCE = ExpectedColumnSchema(
    table_name=TableNames.METADATA_REFERENCE,
    columns=(
        ExpectedColumn("reference_scope", "TEXT", not_null=True),
        ExpectedColumn("table_name", "TEXT", not_null=False),
        ExpectedColumn("column_name", "TEXT", not_null=False),
        ExpectedColumn("row_id_value", "INTEGER", not_null=False),
        ExpectedColumn("timestamp", "DATETIME", not_null=True, has_default=True),
        ExpectedColumn("md_file_id", "INTEGER", not_null=True),
        ExpectedColumn("md_parent_id", "INTEGER", not_null=False),
    ),
)

STANDARD_SCHEMAS: tuple[ExpectedColumnSchema, ...] = (
    SPATIAL_REF_SYS,
    CONTENTS,
    GEOMETRY_COLUMNS,
    TILE_MATRIX_SET,
    TILE_MATRIX,
    EXTENSIONS_SCHEMA,
    DATA_COLUMNS,
    DATA_COLUMN_CONSTRAINTS,
    METADATA,
    METADATA_REFERENCE,
)

DATA_TYPES = ("features", "tiles", "attributes", "2d-gridded-coverage")

GEOMETRY_TYPES = (
    "GEOMETRY",
    "POINT",
    "LINESTRING",
    "POLYGON",
    "MULTIPOINT",
    "MULTILINESTRING",
    "MULTIPOLYGON",
    "GEOMETRYCOLLECTION",
)

MD_SCOPES = (
    "undefined",
    "fieldSession",
    "collectionSession",
    "series",
    "dataset",
    "featureType",
    "feature",
    "attributeType",
    "attribute",
    "tile",
    "model",
    "catalog",
    "schema",
    "taxonomy",
    "software",
    "service",
    "collectionHardware",
    "nonGeographicDataset",
    "dimensionGroup",
)

REFERENCE_SCOPES = ("geopackage", "table", "column", "row", "row/col")

CONSTRAINT_TYPES = ("range", "enum", "glob")

DEFAULT_SRS_IDS = (-1, 0, 4326)


def get_schema(table_name: str) -> ExpectedColumnSchema:
    for schema in STANDARD_SCHEMAS:
        if schema.table_name == table_name:
            return schema
    raise KeyError(f"Unknown standard table '{table_name}'")
