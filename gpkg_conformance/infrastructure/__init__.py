"""Infrastructure layer for the GeoPackage conformance engine.

This layer contains adapters for the SQLite container, run configuration
files, report output and console logging. It implements the ports defined
in the application layer.
"""

__all__ = []
