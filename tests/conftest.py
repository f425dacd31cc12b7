"""Shared fixtures: real GeoPackage files and an in-memory fake container."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
import sqlite3

import pytest

from gpkg_conformance.domain.entities.schema import ColumnInfo
from gpkg_conformance.exceptions import TableNotFoundError

CORE_SQL = [
    """CREATE TABLE gpkg_spatial_ref_sys (
        srs_name TEXT NOT NULL,
        srs_id INTEGER NOT NULL PRIMARY KEY,
        organization TEXT NOT NULL,
        organization_coordsys_id INTEGER NOT NULL,
        definition TEXT NOT NULL,
        description TEXT
    )""",
    "INSERT INTO gpkg_spatial_ref_sys VALUES "
    "('Undefined cartesian SRS', -1, 'NONE', -1, 'undefined', NULL)",
    "INSERT INTO gpkg_spatial_ref_sys VALUES "
    "('Undefined geographic SRS', 0, 'NONE', 0, 'undefined', NULL)",
    "INSERT INTO gpkg_spatial_ref_sys VALUES "
    "('WGS 84 geodetic', 4326, 'EPSG', 4326, 'GEOGCS[\"WGS 84\"]', 'longitude/latitude')",
    """CREATE TABLE gpkg_contents (
        table_name TEXT NOT NULL PRIMARY KEY,
        data_type TEXT NOT NULL,
        identifier TEXT UNIQUE,
        description TEXT DEFAULT '',
        last_change DATETIME NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')),
        min_x DOUBLE,
        min_y DOUBLE,
        max_x DOUBLE,
        max_y DOUBLE,
        srs_id INTEGER,
        CONSTRAINT fk_gc_r_srs_id FOREIGN KEY (srs_id)
            REFERENCES gpkg_spatial_ref_sys(srs_id)
    )""",
    "CREATE TABLE roads (fid INTEGER PRIMARY KEY, geom LINESTRING, lanes INTEGER)",
    """CREATE TABLE tiles_t (
        id INTEGER PRIMARY KEY,
        zoom_level INTEGER NOT NULL,
        tile_column INTEGER NOT NULL,
        tile_row INTEGER NOT NULL,
        tile_data BLOB NOT NULL
    )""",
    "INSERT INTO gpkg_contents (table_name, data_type, identifier, srs_id) "
    "VALUES ('roads', 'features', 'roads', 4326)",
    "INSERT INTO gpkg_contents (table_name, data_type, identifier, srs_id) "
    "VALUES ('tiles_t', 'tiles', 'tiles', 4326)",
]

FEATURES_SQL = [
    """CREATE TABLE gpkg_geometry_columns (
        table_name TEXT NOT NULL,
        column_name TEXT NOT NULL,
        geometry_type_name TEXT NOT NULL,
        srs_id INTEGER NOT NULL,
        z TINYINT NOT NULL,
        m TINYINT NOT NULL,
        CONSTRAINT pk_geom_cols PRIMARY KEY (table_name, column_name)
    )""",
    "INSERT INTO gpkg_geometry_columns VALUES ('roads', 'geom', 'LINESTRING', 4326, 0, 0)",
]

TILES_SQL = [
    """CREATE TABLE gpkg_tile_matrix_set (
        table_name TEXT NOT NULL PRIMARY KEY,
        srs_id INTEGER NOT NULL,
        min_x DOUBLE NOT NULL,
        min_y DOUBLE NOT NULL,
        max_x DOUBLE NOT NULL,
        max_y DOUBLE NOT NULL
    )""",
    "INSERT INTO gpkg_tile_matrix_set VALUES ('tiles_t', 4326, -180, -90, 180, 90)",
    """CREATE TABLE gpkg_tile_matrix (
        table_name TEXT NOT NULL,
        zoom_level INTEGER NOT NULL,
        matrix_width INTEGER NOT NULL,
        matrix_height INTEGER NOT NULL,
        tile_width INTEGER NOT NULL,
        tile_height INTEGER NOT NULL,
        pixel_x_size DOUBLE NOT NULL,
        pixel_y_size DOUBLE NOT NULL,
        CONSTRAINT pk_ttm PRIMARY KEY (table_name, zoom_level)
    )""",
    "INSERT INTO gpkg_tile_matrix VALUES "
    "('tiles_t', 0, 1, 1, 256, 256, 0.703125, 0.703125)",
    "INSERT INTO gpkg_tile_matrix VALUES "
    "('tiles_t', 1, 2, 1, 256, 256, 0.3515625, 0.3515625)",
]

EXTENSIONS_DDL = """CREATE TABLE gpkg_extensions (
    table_name TEXT,
    column_name TEXT,
    extension_name TEXT NOT NULL,
    definition TEXT NOT NULL,
    scope TEXT NOT NULL,
    CONSTRAINT ge_tce UNIQUE (table_name, column_name, extension_name)
)"""

EXTENSIONS_SQL = [
    EXTENSIONS_DDL,
    "INSERT INTO gpkg_extensions VALUES ('roads', 'geom', 'gpkg_rtree_index', "
    "'http://www.geopackage.org/spec120/#extension_rtree', 'write-only')",
    "INSERT INTO gpkg_extensions VALUES ('gpkg_metadata', NULL, 'gpkg_metadata', "
    "'http://www.geopackage.org/spec120/#extension_metadata', 'read-write')",
]

SCHEMA_SQL = [
    """CREATE TABLE gpkg_data_columns (
        table_name TEXT NOT NULL,
        column_name TEXT NOT NULL,
        name TEXT,
        title TEXT,
        description TEXT,
        mime_type TEXT,
        constraint_name TEXT,
        CONSTRAINT pk_gdc PRIMARY KEY (table_name, column_name)
    )""",
    "INSERT INTO gpkg_data_columns VALUES "
    "('roads', 'lanes', 'lanes', 'Lanes', NULL, NULL, 'lane_range')",
    """CREATE TABLE gpkg_data_column_constraints (
        constraint_name TEXT NOT NULL,
        constraint_type TEXT NOT NULL,
        value TEXT,
        min NUMERIC,
        min_is_inclusive BOOLEAN,
        max NUMERIC,
        max_is_inclusive BOOLEAN,
        description TEXT,
        CONSTRAINT gdcc_ntv UNIQUE (constraint_name, constraint_type, value)
    )""",
    "INSERT INTO gpkg_data_column_constraints VALUES "
    "('lane_range', 'range', NULL, 1, 1, 8, 1, 'Lane count')",
]

METADATA_SQL = [
    """CREATE TABLE gpkg_metadata (
        id INTEGER NOT NULL PRIMARY KEY,
        md_scope TEXT NOT NULL DEFAULT 'dataset',
        md_standard_uri TEXT NOT NULL,
        mime_type TEXT NOT NULL DEFAULT 'text/xml',
        metadata TEXT NOT NULL DEFAULT ''
    )""",
    "INSERT INTO gpkg_metadata VALUES "
    "(1, 'dataset', 'http://www.isotc211.org/2005/gmd', 'text/xml', '<md/>')",
    """CREATE TABLE gpkg_metadata_reference (
        reference_scope TEXT NOT NULL,
        table_name TEXT,
        column_name TEXT,
        row_id_value INTEGER,
        timestamp DATETIME NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')),
        md_file_id INTEGER NOT NULL,
        md_parent_id INTEGER
    )""",
    "INSERT INTO gpkg_metadata_reference VALUES "
    "('geopackage', NULL, NULL, NULL, '2024-01-01T00:00:00.000Z', 1, NULL)",
]

ALL_SECTIONS: dict[str, list[str]] = {
    "core": CORE_SQL,
    "features": FEATURES_SQL,
    "tiles": TILES_SQL,
    "extensions": EXTENSIONS_SQL,
    "schema": SCHEMA_SQL,
    "metadata": METADATA_SQL,
}

GeoPackageFactory = Callable[..., Path]


def write_geopackage(path: Path, statements: Sequence[str]) -> Path:
    connection = sqlite3.connect(path)
    try:
        for statement in statements:
            connection.execute(statement)
        connection.commit()
    finally:
        connection.close()
    return path


@pytest.fixture
def gpkg_factory(tmp_path: Path) -> GeoPackageFactory:
    """Build GeoPackage files from named SQL sections plus extra statements.

    ``omit`` drops whole sections; ``replace`` swaps a section for custom
    statements; ``extra`` runs after all sections.
    """

    def make(
        name: str = "sample.gpkg",
        *,
        omit: Sequence[str] = (),
        replace: Mapping[str, Sequence[str]] | None = None,
        extra: Sequence[str] = (),
    ) -> Path:
        statements: list[str] = []
        for section, sql in ALL_SECTIONS.items():
            if section in omit:
                continue
            statements.extend((replace or {}).get(section, sql))
        statements.extend(extra)
        return write_geopackage(tmp_path / name, statements)

    return make


@pytest.fixture
def conformant_gpkg(gpkg_factory: GeoPackageFactory) -> Path:
    return gpkg_factory()


class FakeContainer:
    """In-memory container for validator unit tests.

    Tables map a name to ``(columns, rows)``. ``read_error`` makes every
    read raise the given exception.
    """

    def __init__(
        self,
        tables: Mapping[str, tuple[Sequence[ColumnInfo], Sequence[Mapping[str, object]]]]
        | None = None,
        *,
        read_error: Exception | None = None,
    ) -> None:
        self.tables = dict(tables or {})
        self.read_error = read_error
        self.rows_requested: list[str] = []

    @property
    def locator(self) -> str:
        return "memory://fake"

    def table_exists(self, table_name: str) -> bool:
        if self.read_error is not None:
            raise self.read_error
        return table_name in self.tables

    def columns(self, table_name: str) -> Sequence[ColumnInfo]:
        if self.read_error is not None:
            raise self.read_error
        if table_name not in self.tables:
            raise TableNotFoundError(table_name)
        return list(self.tables[table_name][0])

    def rows(self, table_name: str) -> Iterator[Mapping[str, object]]:
        if self.read_error is not None:
            raise self.read_error
        if table_name not in self.tables:
            raise TableNotFoundError(table_name)
        self.rows_requested.append(table_name)
        return iter([dict(row) for row in self.tables[table_name][1]])


@pytest.fixture
def fake_container() -> type[FakeContainer]:
    return FakeContainer
