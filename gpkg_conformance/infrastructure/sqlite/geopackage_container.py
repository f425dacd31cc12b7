"""Read-only SQLite adapter for the container port.

The database is opened through the SQLite URI form with ``mode=ro`` so the
engine can never write to the container under test. Row reads go through
pandas in fixed-size chunks; each chunk is converted back to plain Python
values before it reaches a validator.
"""

from __future__ import annotations

import math
from pathlib import Path
import sqlite3
from typing import TYPE_CHECKING, Any, Self, cast

import numpy as np
import pandas as pd

from ...constants import Defaults, TableNames
from ...domain.entities.schema import ColumnInfo
from ...exceptions import ContainerOpenError, ContainerReadError, TableNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

SYSTEM_TABLES = frozenset({TableNames.SQLITE_MASTER})


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def normalize_value(value: object) -> object:
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class GeoPackageContainer:
    pass

    def __init__(self, path: Path, *, chunk_size: int = Defaults.CHUNK_SIZE) -> None:
        super().__init__()
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.path = Path(path)
        self.chunk_size = chunk_size
        self._connection: sqlite3.Connection | None = None

    @classmethod
    def open(cls, path: Path, *, chunk_size: int = Defaults.CHUNK_SIZE) -> Self:
        container = cls(path, chunk_size=chunk_size)
        container.connect()
        return container

    def connect(self) -> None:
        if self._connection is not None:
            return
        if not self.path.is_file():
            raise ContainerOpenError(f"Container not found: {self.path}")
        uri = f"{self.path.resolve().as_uri()}?mode=ro"
        try:
            connection = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            raise ContainerOpenError(f"Cannot open {self.path}: {e}") from e
        try:
            connection.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.DatabaseError as e:
            connection.close()
            raise ContainerOpenError(
                f"{self.path} is not an SQLite database: {e}"
            ) from e
        self._connection = connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def locator(self) -> str:
        return str(self.path)

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise ContainerReadError(f"Container {self.path} is not open")
        return self._connection

    def table_exists(self, table_name: str) -> bool:
        if table_name in SYSTEM_TABLES:
            return True
        try:
            row = self.connection.execute(
                "SELECT 1 FROM sqlite_master WHERE type IN ('table', 'view') "
                "AND name = ?",
                (table_name,),
            ).fetchone()
        except sqlite3.Error as e:
            raise ContainerReadError(
                f"Failed to look up {table_name} in {self.path}: {e}"
            ) from e
        return row is not None

    def columns(self, table_name: str) -> list[ColumnInfo]:
        if not self.table_exists(table_name):
            raise TableNotFoundError(table_name)
        try:
            cursor = self.connection.execute(
                f"PRAGMA table_info({quote_identifier(table_name)})"
            )
            info = cursor.fetchall()
        except sqlite3.Error as e:
            raise ContainerReadError(
                f"Failed to read the definition of {table_name}: {e}"
            ) from e
        # (cid, name, type, notnull, dflt_value, pk)
        return [
            ColumnInfo(
                name=str(name),
                declared_type=str(declared_type or ""),
                not_null=bool(not_null),
                has_default=default is not None,
            )
            for _cid, name, declared_type, not_null, default, _pk in info
        ]

    def rows(self, table_name: str) -> Iterator[dict[str, object]]:
        if not self.table_exists(table_name):
            raise TableNotFoundError(table_name)
        return self._stream(table_name)

    def _stream(self, table_name: str) -> Iterator[dict[str, object]]:
        query = f"SELECT * FROM {quote_identifier(table_name)}"
        try:
            chunks = pd.read_sql_query(
                query,
                self.connection,
                chunksize=self.chunk_size,
                dtype_backend="numpy_nullable",
            )
            for chunk in chunks:
                records = cast("list[dict[str, Any]]", chunk.to_dict(orient="records"))
                for record in records:
                    yield {
                        str(key): normalize_value(value)
                        for key, value in record.items()
                    }
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            raise ContainerReadError(f"Failed to read rows of {table_name}: {e}") from e
