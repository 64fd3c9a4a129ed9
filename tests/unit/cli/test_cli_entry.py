"""CLI argument, exit-status, and startup behavior tests.

Verifies usage errors exit with status 1, unreadable files are reported
before the terminal is touched, and ``--nopager`` prints one screen.
"""

from __future__ import annotations

import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazybindiff import cli


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True

    def fileno(self) -> int:
        return 1


class CliArgumentTests(unittest.TestCase):
    def test_missing_arguments_exit_with_status_one(self) -> None:
        stderr = io.StringIO()
        with mock.patch("sys.stderr", stderr), self.assertRaises(SystemExit) as ctx:
            cli.main(["only-one.bin"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("usage:", stderr.getvalue())

    def test_invalid_lines_value_exits_with_status_one(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli.main(["a.bin", "b.bin", "--lines", "0"])
        self.assertEqual(ctx.exception.code, 1)

    def test_unopenable_file_reports_and_returns_one(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            present = Path(tmp) / "present.bin"
            present.write_bytes(b"data")
            missing = Path(tmp) / "missing.bin"

            stderr = io.StringIO()
            with mock.patch("sys.stderr", stderr), mock.patch("lazybindiff.cli.run_session") as run_session:
                status = cli.main([str(present), str(missing)])

        self.assertEqual(status, 1)
        run_session.assert_not_called()
        self.assertIn("cannot open", stderr.getvalue())
        self.assertIn("missing.bin", stderr.getvalue())

    def test_directory_argument_is_an_initialization_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            present = Path(tmp) / "present.bin"
            present.write_bytes(b"data")
            with mock.patch("sys.stderr", io.StringIO()):
                self.assertEqual(cli.main([tmp, str(present)]), 1)


class CliRunTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.first = root / "first.bin"
        self.second = root / "second.bin"
        self.first.write_bytes(b"Hello, world")
        self.second.write_bytes(b"Hello, World!")
        self.addCleanup(self._tmp.cleanup)
        config_patch = mock.patch("lazybindiff.config.CONFIG_PATH", root / "config.json")
        config_patch.start()
        self.addCleanup(config_patch.stop)

    def test_nopager_prints_first_screen_without_color(self) -> None:
        stdout = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("lazybindiff.cli.run_session") as run_session:
            status = cli.main([str(self.first), str(self.second), "--nopager"])

        self.assertEqual(status, 0)
        run_session.assert_not_called()
        output = stdout.getvalue()
        self.assertNotIn("\033[", output)
        self.assertIn(str(self.first), output)
        self.assertIn("0000 0000: 48 65 6C 6C", output)
        self.assertIn("2 differences on this page", output)

    def test_non_tty_output_falls_back_to_printing(self) -> None:
        stdout = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("lazybindiff.cli.run_session") as run_session:
            status = cli.main([str(self.first), str(self.second)])
        self.assertEqual(status, 0)
        run_session.assert_not_called()
        self.assertIn("differences on this page", stdout.getvalue())

    def test_interactive_session_receives_merged_options(self) -> None:
        with mock.patch("sys.stdin", _Tty()), mock.patch("sys.stdout", _Tty()), mock.patch(
            "lazybindiff.cli.run_session"
        ) as run_session:
            status = cli.main([str(self.first), str(self.second), "--theme", "ocean", "--lines", "4"])

        self.assertEqual(status, 0)
        run_session.assert_called_once()
        navigator = run_session.call_args.args[0]
        self.assertEqual(navigator.geometry.lines_per_view, 4)
        self.assertEqual(run_session.call_args.kwargs["theme_name"], "ocean")
        self.assertFalse(run_session.call_args.kwargs["no_color"])
        self.assertTrue(navigator.top.closed)

    def test_log_file_receives_session_records(self) -> None:
        log_path = Path(self._tmp.name) / "session.log"
        package_logger = logging.getLogger("lazybindiff")
        previous_handlers = list(package_logger.handlers)
        previous_level = package_logger.level
        try:
            with mock.patch("sys.stdout", io.StringIO()):
                cli.main([str(self.first), str(self.second), "--log-file", str(log_path), "--log-level", "DEBUG"])
        finally:
            for handler in list(package_logger.handlers):
                if handler not in previous_handlers:
                    package_logger.removeHandler(handler)
                    handler.close()
            package_logger.setLevel(previous_level)

        self.assertIn("comparing", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
