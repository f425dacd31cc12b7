"""Tests for JSON and TestNG-style XML report output."""

from __future__ import annotations

from dataclasses import replace
import json
from xml.etree import ElementTree as ET

from gpkg_conformance.application.ports import ReportWriterPort
from gpkg_conformance.domain.entities import FailureKind, RunResult, ValidationVerdict
from gpkg_conformance.infrastructure.services import ReportWriter, build_testng_tree
from gpkg_conformance.infrastructure.services.report_writer import (
    REPORT_SCHEMA,
    REPORT_SCHEMA_VERSION,
)


def make_result() -> RunResult:
    return RunResult(
        target="sample.gpkg",
        verdicts=(
            replace(ValidationVerdict.passing("R10"), class_name="Core"),
            replace(
                ValidationVerdict.failing(
                    "R58",
                    FailureKind.STRUCTURAL_MISMATCH,
                    "gpkg_extensions.extension_name should be not-null",
                    violation_count=1,
                    samples=("extension_name: TEXT nullable",),
                ),
                class_name="Extension Mechanism",
            ),
            replace(
                ValidationVerdict.failing(
                    "Metadata",
                    FailureKind.CONFIGURATION_FAULT,
                    "Conformance class Metadata is not enabled",
                ),
                class_name="Metadata",
            ),
        ),
        skipped_classes=("Tiles",),
        diagnostics=("Unknown conformance class 'core' in inclusion set",),
    )


class TestBuildTestngTree:
    def test_root_counts(self):
        root = build_testng_tree(make_result())

        assert root.tag == "testng-results"
        assert root.get("total") == "3"
        assert root.get("passed") == "1"
        assert root.get("failed") == "2"
        assert root.get("skipped") == "1"

    def test_methods_grouped_by_class(self):
        root = build_testng_tree(make_result())

        tests = root.findall("./suite/test")
        assert [t.get("name") for t in tests] == [
            "Core",
            "Extension Mechanism",
            "Metadata",
            "Tiles",
        ]
        assert tests[-1].get("status") == "SKIP"
        method = tests[1].find("test-method")
        assert method.get("name") == "R58"
        assert method.get("status") == "FAIL"
        exception = method.find("exception")
        assert exception.get("class") == "StructuralMismatch"
        assert exception.findtext("message").startswith("gpkg_extensions")
        assert [s.text for s in exception.findall("sample")] == [
            "extension_name: TEXT nullable"
        ]

    def test_passing_method_has_no_exception(self):
        root = build_testng_tree(make_result())

        method = root.find("./suite/test[@name='Core']/test-method")
        assert method.get("status") == "PASS"
        assert method.find("exception") is None

    def test_diagnostics(self):
        root = build_testng_tree(make_result())

        assert [e.text for e in root.findall("reporter-output")] == [
            "Unknown conformance class 'core' in inclusion set"
        ]


class TestReportWriter:
    def test_implements_port(self):
        assert isinstance(ReportWriter(), ReportWriterPort)

    def test_write_json(self, tmp_path):
        path = ReportWriter().write_json(make_result(), tmp_path / "out" / "report.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["schema"] == REPORT_SCHEMA
        assert data["schema_version"] == REPORT_SCHEMA_VERSION
        assert data["failed"] == 2
        assert data["verdicts"][1]["failure"] == "StructuralMismatch"
        assert "generated_at" in data

    def test_write_xml_failed_matches_result(self, tmp_path):
        result = make_result()

        path = ReportWriter().write_xml(result, tmp_path / "testng-results.xml")

        root = ET.parse(path).getroot()
        assert int(root.get("failed")) == result.failed
        assert path.read_bytes().startswith(b"<?xml")
