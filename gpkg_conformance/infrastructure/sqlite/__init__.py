"""SQLite container adapter."""

from .geopackage_container import GeoPackageContainer

__all__ = ["GeoPackageContainer"]
