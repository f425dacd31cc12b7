"""Domain layer for the GeoPackage conformance engine.

This layer contains the requirement catalog, the validators and the verdict
model. It reads containers only through the ContainerPort protocol.
"""
