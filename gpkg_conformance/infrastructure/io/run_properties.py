"""Reader for run configuration property files.

Run configuration arrives as a Java-style properties XML document:

    <properties>
      <entry key="iut">file:/data/sample.gpkg</entry>
      <entry key="ics">Core,Tiles</entry>
    </properties>

``iut`` locates the container (a ``file:`` URI or a plain path) and ``ics``
lists the conformance classes to enable. Class names are kept exactly as
written apart from surrounding whitespace.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname
from xml.etree import ElementTree as ET

from ...application.models import TestRunRequest
from ...constants import TestRunArg
from ...domain.services.class_selector import parse_inclusion_set
from ...exceptions import RunPropertiesError


def read_properties(path: Path) -> dict[str, str]:
    try:
        root = ET.parse(path).getroot()
    except FileNotFoundError as e:
        raise RunPropertiesError(f"Run properties file not found: {path}") from e
    except ET.ParseError as e:
        raise RunPropertiesError(f"Malformed run properties {path}: {e}") from e
    if root.tag != "properties":
        raise RunPropertiesError(
            f"Expected a <properties> document in {path}, found <{root.tag}>"
        )
    entries: dict[str, str] = {}
    for entry in root.iter("entry"):
        key = entry.get("key")
        if not key:
            raise RunPropertiesError(f"Property entry without a key in {path}")
        entries[key] = (entry.text or "").strip()
    return entries


def resolve_locator(locator: str) -> Path:
    parsed = urlparse(locator)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    # Single letters are Windows drive prefixes, not schemes.
    if parsed.scheme and len(parsed.scheme) > 1:
        raise RunPropertiesError(
            f"Unsupported container locator scheme '{parsed.scheme}': {locator}"
        )
    return Path(locator)


def load_run_properties(path: Path) -> TestRunRequest:
    entries = read_properties(path)
    locator = entries.get(TestRunArg.IUT)
    if not locator:
        raise RunPropertiesError(f"Missing '{TestRunArg.IUT}' entry in {path}")
    inclusion_set = None
    if TestRunArg.ICS in entries:
        inclusion_set = parse_inclusion_set(entries[TestRunArg.ICS])
    return TestRunRequest(
        container_path=resolve_locator(locator), inclusion_set=inclusion_set
    )
