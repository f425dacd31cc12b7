from .registry import build_catalog, exists_id, find_class, get_catalog, validate_catalog
from .standard_tables import STANDARD_SCHEMAS, get_schema

__all__ = [
    "STANDARD_SCHEMAS",
    "build_catalog",
    "exists_id",
    "find_class",
    "get_catalog",
    "get_schema",
    "validate_catalog",
]
