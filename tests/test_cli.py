"""CLI entrypoint tests.

Verifies the current directory is browsed, fatal errors become a short
diagnostic exit, and logging stays off the terminal unless requested.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fee import cli
from fee.config import DEFAULT_CONFIG
from fee.errors import ConfigError, FilesystemError


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._saved_handlers = list(cli.logger.handlers)
        self._saved_level = cli.logger.level
        cli.logger.handlers.clear()

    def tearDown(self) -> None:
        for handler in cli.logger.handlers:
            handler.close()
        cli.logger.handlers[:] = self._saved_handlers
        cli.logger.setLevel(self._saved_level)

    def test_main_browses_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch.object(sys, "argv", ["fee"]), mock.patch(
                    "fee.cli.load_config", return_value=DEFAULT_CONFIG
                ), mock.patch("fee.cli.run_browser") as run_browser:
                    cli.main()
            finally:
                os.chdir(previous_cwd)

        run_browser.assert_called_once()
        path, config = run_browser.call_args.args
        self.assertEqual(path.resolve(), root)
        self.assertIs(config, DEFAULT_CONFIG)

    def test_config_error_exits_with_diagnostic(self) -> None:
        with mock.patch.object(sys, "argv", ["fee"]), mock.patch(
            "fee.cli.load_config", side_effect=ConfigError("bad json")
        ), mock.patch("fee.cli.run_browser") as run_browser:
            with self.assertRaises(SystemExit) as ctx:
                cli.main()

        run_browser.assert_not_called()
        self.assertEqual(ctx.exception.code, "fee: bad json")

    def test_session_error_exits_with_diagnostic(self) -> None:
        error = FilesystemError(Path("/locked"), "Permission denied")
        with mock.patch.object(sys, "argv", ["fee"]), mock.patch(
            "fee.cli.load_config", return_value=DEFAULT_CONFIG
        ), mock.patch("fee.cli.run_browser", side_effect=error):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(default_path=Path("/"))

        self.assertEqual(ctx.exception.code, "fee: /locked: Permission denied")

    def test_rejects_unknown_arguments(self) -> None:
        with mock.patch.object(sys, "argv", ["fee", "--bogus"]), mock.patch("fee.cli.run_browser") as run_browser:
            with mock.patch("sys.stderr"), self.assertRaises(SystemExit) as ctx:
                cli.main()

        self.assertEqual(ctx.exception.code, 2)
        run_browser.assert_not_called()

    def test_logging_defaults_to_null_handler(self) -> None:
        with mock.patch.dict("fee.cli.os.environ", {}, clear=True):
            cli.configure_logging()

        self.assertEqual(len(cli.logger.handlers), 1)
        self.assertIsInstance(cli.logger.handlers[0], logging.NullHandler)

    def test_logging_writes_to_requested_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "fee.log"
            env = {"FEE_LOG_FILE": str(log_path), "FEE_LOG_LEVEL": "info"}
            with mock.patch.dict("fee.cli.os.environ", env, clear=True):
                cli.configure_logging()
            logging.getLogger("fee.app").info("session started")
            for handler in cli.logger.handlers:
                handler.flush()

            self.assertEqual(cli.logger.level, logging.INFO)
            self.assertIn("session started", log_path.read_text(encoding="utf-8"))
            for handler in cli.logger.handlers:
                handler.close()


if __name__ == "__main__":
    unittest.main()
