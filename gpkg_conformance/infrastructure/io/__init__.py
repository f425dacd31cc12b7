"""Infrastructure I/O layer.

Readers for run configuration files. Report output lives in
``infrastructure.services``.
"""

from .run_properties import load_run_properties, read_properties, resolve_locator

__all__ = ["load_run_properties", "read_properties", "resolve_locator"]
