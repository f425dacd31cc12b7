"""Unit tests for logger implementations.

Tests verify that:
1. ConsoleLogger and NullLogger implement LoggerPort
2. ConsoleLogger honours verbosity and keeps run statistics
3. Verdict messages are printed literally, never as rich markup
"""

from dataclasses import replace
from io import StringIO
import unittest

from rich.console import Console

from gpkg_conformance.application.ports.services import LoggerPort, NullLogger
from gpkg_conformance.domain.entities import FailureKind, RunResult, ValidationVerdict
from gpkg_conformance.infrastructure.logging import (
    ConsoleLogger,
    LogContext,
    LogLevel,
)


def failing_verdict(message: str = "bad value") -> ValidationVerdict:
    return replace(
        ValidationVerdict.failing("R62", FailureKind.CONTENT_VIOLATION, message),
        class_name="Extension Mechanism",
    )


class TestLoggerPort(unittest.TestCase):
    """Logger implementations comply with the LoggerPort protocol."""

    def test_console_logger_implements_loggerport(self):
        self.assertIsInstance(ConsoleLogger(), LoggerPort)

    def test_null_logger_implements_loggerport(self):
        self.assertIsInstance(NullLogger(), LoggerPort)

    def test_loggerport_has_run_hooks(self):
        required_methods = {
            "info",
            "success",
            "warning",
            "error",
            "debug",
            "log_run_start",
            "log_class_start",
            "log_verdict",
            "log_run_complete",
        }
        protocol_methods = {
            name for name in dir(LoggerPort) if not name.startswith("_")
        }
        self.assertTrue(required_methods.issubset(protocol_methods))


class TestConsoleLogger(unittest.TestCase):
    def setUp(self):
        self.buffer = StringIO()
        self.console = Console(file=self.buffer, width=200)
        self.logger = ConsoleLogger(console=self.console, verbosity=LogLevel.DEBUG)

    def output(self) -> str:
        return self.buffer.getvalue()

    def test_initialization(self):
        logger = ConsoleLogger()
        self.assertEqual(logger.verbosity, 0)
        self.assertIsNone(logger._context)
        self.assertEqual(logger.stats["requirements_failed"], 0)

    def test_warning_and_error_are_counted(self):
        self.logger.warning("careful")
        self.logger.error("broken")

        self.assertEqual(self.logger.stats["warnings"], 1)
        self.assertEqual(self.logger.stats["errors"], 1)
        self.assertIn("careful", self.output())
        self.assertIn("broken", self.output())

    def test_verbose_hidden_at_normal_level(self):
        logger = ConsoleLogger(console=self.console, verbosity=LogLevel.NORMAL)

        logger.verbose("hidden detail")
        logger.debug("hidden debug")
        logger.info("shown")

        self.assertNotIn("hidden", self.output())
        self.assertIn("shown", self.output())

    def test_class_prefix(self):
        self.logger.log_run_start("sample.gpkg", ["Core"])
        self.logger.log_class_start("Core", 3)
        self.logger.verbose("inside")

        self.assertIn("[Core] inside", self.output())
        self.assertEqual(self.logger.stats["classes_evaluated"], 1)

    def test_log_verdict_counts(self):
        self.logger.log_verdict(ValidationVerdict.passing("R10"))
        self.logger.log_verdict(failing_verdict())

        self.assertEqual(self.logger.stats["requirements_passed"], 1)
        self.assertEqual(self.logger.stats["requirements_failed"], 1)
        self.assertIn("R62: FAIL (ContentViolation) bad value", self.output())

    def test_verdict_message_is_not_markup(self):
        self.logger.log_verdict(failing_verdict("row 1 [bold]x[/bold]"))

        self.assertIn("[bold]x[/bold]", self.output())

    def test_bracketed_warning_is_printed_literally(self):
        self.logger.warning("Unknown conformance class '[/x]' in inclusion set")

        self.assertIn("'[/x]'", self.output())
        self.assertEqual(self.logger.stats["warnings"], 1)

    def test_bracketed_target_is_printed_literally(self):
        self.logger.log_run_start("data/[/x]/sample[1].gpkg", ["[red]Core"])

        self.assertIn("Validating container: data/[/x]/sample[1].gpkg", self.output())
        self.assertIn("Enabled conformance classes: [red]Core", self.output())

    def test_every_level_accepts_closing_tags(self):
        for method in (
            self.logger.info,
            self.logger.verbose,
            self.logger.debug,
            self.logger.success,
            self.logger.error,
        ):
            method("R61: container error: no such table: [/b]")

        self.assertEqual(self.output().count("no such table: [/b]"), 5)

    def test_log_class_skipped(self):
        self.logger.log_class_skipped("Tiles", "not in the inclusion set")

        self.assertEqual(self.logger.stats["classes_skipped"], 1)
        self.assertIn("Skipping conformance class Tiles", self.output())

    def test_log_run_complete(self):
        result = RunResult("sample.gpkg", (failing_verdict(),))
        self.logger.log_run_start("sample.gpkg", [])

        self.logger.log_run_complete(result)

        self.assertIn("1 requirement(s): 0 passed, 1 failed", self.output())
        self.assertEqual(self.logger.stats["errors"], 1)


class TestLogContext(unittest.TestCase):
    def test_elapsed_ms_is_non_negative(self):
        self.assertGreaterEqual(LogContext(target="a").elapsed_ms(), 0)


class TestNullLogger(unittest.TestCase):
    def test_all_methods_are_silent(self):
        logger = NullLogger()
        logger.info("x")
        logger.success("x")
        logger.warning("x")
        logger.error("x")
        logger.debug("x")
        logger.verbose("x")
        logger.log_run_start("t", ["Core"])
        logger.log_class_start("Core", 1)
        logger.log_class_skipped("Tiles", "r")
        logger.log_verdict(failing_verdict())
        logger.log_run_complete(RunResult("t", ()))
