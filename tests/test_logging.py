"""Tests for puzzlebench.logging."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import click
from click.testing import CliRunner

from puzzlebench.logging import ClickHandler, get_logger, setup_logging


class TestSetupLogging(unittest.TestCase):
    """Tests for setup_logging() and get_logger()."""

    def tearDown(self) -> None:
        logger = logging.getLogger("puzzlebench")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_console_handler_is_click_handler(self) -> None:
        self.assertIsInstance(setup_logging().handlers[0], ClickHandler)

    def test_console_levels(self) -> None:
        self.assertEqual(setup_logging().handlers[0].level, logging.INFO)
        self.assertEqual(setup_logging(verbose=True).handlers[0].level, logging.DEBUG)
        self.assertEqual(setup_logging(quiet=True).handlers[0].level, logging.WARNING)
        self.assertEqual(
            setup_logging(verbose=True, quiet=True).handlers[0].level, logging.DEBUG
        )

    def test_reconfigure_replaces_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        self.assertEqual(len(logger.handlers), 1)

    def test_file_handler_logs_debug(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "bench.log"
            logger = setup_logging(quiet=True, log_file=log_file)
            get_logger("bench.timing").debug("calibrated")
            for handler in logger.handlers:
                handler.flush()
                handler.close()
            logger.handlers.clear()
            self.assertIn("puzzlebench.bench.timing: calibrated", log_file.read_text())

    def test_console_goes_through_click(self) -> None:
        setup_logging()
        with patch("puzzlebench.logging.click.echo") as echo:
            get_logger("inputs").info("Got 8 bytes of input")
            get_logger("inputs").debug("hidden")
        echo.assert_called_once_with("Got 8 bytes of input", err=True)

    def test_warning_is_labelled_and_colored(self) -> None:
        setup_logging(quiet=True)
        with patch("puzzlebench.logging.click.echo") as echo:
            get_logger("bench.runner").warning("Benchmark budget is zero")
        message = echo.call_args.args[0]
        self.assertEqual(click.unstyle(message), "Warning: Benchmark budget is zero")
        self.assertNotEqual(message, click.unstyle(message))

    def test_cli_runner_captures_console(self) -> None:
        @click.command()
        def cmd() -> None:
            setup_logging()
            get_logger("cli").error("boom")

        result = CliRunner().invoke(cmd)
        self.assertIn("Error: boom", result.output)

    def test_child_logger_name(self) -> None:
        self.assertEqual(get_logger("inputs").name, "puzzlebench.inputs")


if __name__ == "__main__":
    unittest.main()
