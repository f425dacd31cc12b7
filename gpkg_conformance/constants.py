from typing import ClassVar


class Defaults:
    CHUNK_SIZE = 500
    SAMPLE_LIMIT = 5
    ALLOWED_VALUE_EXTENSIONS: ClassVar[tuple[str, ...]] = ("gpkg_2d_gridded_coverage",)
    CONFIG_FILE = "gpkg_conformance.toml"
    REPORT_JSON = "conformance_report.json"
    REPORT_XML = "testng-results.xml"


class TableNames:
    SPATIAL_REF_SYS = "gpkg_spatial_ref_sys"
    CONTENTS = "gpkg_contents"
    GEOMETRY_COLUMNS = "gpkg_geometry_columns"
    TILE_MATRIX_SET = "gpkg_tile_matrix_set"
    TILE_MATRIX = "gpkg_tile_matrix"
    EXTENSIONS = "gpkg_extensions"
    DATA_COLUMNS = "gpkg_data_columns"
    DATA_COLUMN_CONSTRAINTS = "gpkg_data_column_constraints"
    METADATA = "gpkg_metadata"
    METADATA_REFERENCE = "gpkg_metadata_reference"
    SQLITE_MASTER = "sqlite_master"


class ClassNames:
    CORE = "Core"
    FEATURES = "Features"
    TILES = "Tiles"
    EXTENSION_MECHANISM = "Extension Mechanism"
    SCHEMA = "Schema"
    METADATA = "Metadata"


class TestRunArg:
    __test__ = False

    IUT = "iut"
    ICS = "ics"
