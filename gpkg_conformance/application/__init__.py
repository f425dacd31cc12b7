"""Application layer for the GeoPackage conformance engine.

This layer contains the test run orchestrator and the ports (interfaces)
it needs from the outside world.
"""

from .models import TestRunRequest

# Import the orchestrator from its module to avoid a cycle through the
# logging adapters:
#   from gpkg_conformance.application.test_run_orchestrator import TestRunOrchestrator

__all__ = ["TestRunRequest"]
