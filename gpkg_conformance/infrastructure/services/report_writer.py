from __future__ import annotations

from datetime import UTC, datetime
import json
from typing import TYPE_CHECKING, override
from xml.etree import ElementTree as ET

from ...application.ports.services import ReportWriterPort

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.verdict import RunResult, ValidationVerdict

REPORT_SCHEMA = "gpkg-conformance.run-report"
REPORT_SCHEMA_VERSION = 1


def build_testng_tree(result: RunResult) -> ET.Element:
    """Build a TestNG-style results document for ``result``.

    The root ``testng-results`` element carries the run counts, so
    ``/testng-results/@failed`` always equals ``result.failed``.
    """
    root = ET.Element(
        "testng-results",
        {
            "total": str(result.total),
            "passed": str(result.passed),
            "failed": str(result.failed),
            "skipped": str(len(result.skipped_classes)),
        },
    )
    suite = ET.SubElement(root, "suite", {"name": result.target})
    by_class: dict[str, list[ValidationVerdict]] = {}
    for verdict in result.verdicts:
        by_class.setdefault(verdict.class_name, []).append(verdict)
    for class_name, verdicts in by_class.items():
        test = ET.SubElement(suite, "test", {"name": class_name})
        for verdict in verdicts:
            _add_method(test, verdict)
    for class_name in result.skipped_classes:
        ET.SubElement(suite, "test", {"name": class_name, "status": "SKIP"})
    for diagnostic in result.diagnostics:
        ET.SubElement(root, "reporter-output").text = diagnostic
    return root


def _add_method(parent: ET.Element, verdict: ValidationVerdict) -> None:
    method = ET.SubElement(
        parent,
        "test-method",
        {"name": verdict.requirement_id, "status": verdict.status},
    )
    if verdict.passed:
        return
    exception = ET.SubElement(
        method,
        "exception",
        {"class": verdict.failure.value if verdict.failure else "Failure"},
    )
    ET.SubElement(exception, "message").text = verdict.message or ""
    for sample in verdict.samples:
        ET.SubElement(exception, "sample").text = sample


class ReportWriter(ReportWriterPort):
    pass

    @override
    def write_json(self, result: RunResult, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "schema": REPORT_SCHEMA,
            "schema_version": REPORT_SCHEMA_VERSION,
            "generated_at": datetime.now(UTC).isoformat(),
            **result.to_dict(),
        }
        output_path.write_text(
            json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return output_path

    @override
    def write_xml(self, result: RunResult, output_path: Path) -> Path:
        tree = ET.ElementTree(build_testng_tree(result))
        ET.indent(tree)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tree.write(output_path, xml_declaration=True, encoding="utf-8")
        return output_path
