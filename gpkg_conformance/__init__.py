"""GeoPackage conformance engine.

This package validates GeoPackage (SQLite) containers against a catalog of
conformance classes and requirements:
- Table definitions of the standard gpkg_* tables
- Row-level value domains and cross-table references
- The extension mechanism registry
- JSON and TestNG-style XML run reports
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("gpkg-conformance")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from gpkg_conformance.domain.catalog import get_catalog
from gpkg_conformance.domain.entities.verdict import (
    FailureKind,
    RunResult,
    ValidationVerdict,
)
from gpkg_conformance.infrastructure.sqlite.geopackage_container import (
    GeoPackageContainer,
)

__all__ = [
    "__version__",
    # Catalog
    "get_catalog",
    # Results
    "FailureKind",
    "RunResult",
    "ValidationVerdict",
    # Container
    "GeoPackageContainer",
]
