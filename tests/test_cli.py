"""CLI argument and input-source behavior tests.

Verifies how ``cag.cli.main`` picks its input and dispatches to the pager.
"""

from __future__ import annotations

import io
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from cag import cli
from cag.errors import StartupTimeoutError
from cag.runtime.app import copy_through


def _fake_stdout() -> mock.Mock:
    return mock.Mock(fileno=mock.Mock(return_value=1))


class ParserTests(unittest.TestCase):
    def test_defaults(self) -> None:
        args = cli.build_parser().parse_args([])
        self.assertIsNone(args.path)
        self.assertEqual(args.style, "monokai")
        self.assertEqual(args.batch_factor, 4)
        self.assertEqual(args.startup_timeout, 1.0)
        self.assertFalse(args.no_color)
        self.assertFalse(args.nopager)

    def test_rejects_non_positive_numbers(self) -> None:
        parser = cli.build_parser()
        with mock.patch("sys.stderr"):
            for argv in (["--batch-factor", "0"], ["--batch-factor", "x"], ["--startup-timeout", "-1"]):
                with self.assertRaises(SystemExit):
                    parser.parse_args(argv)


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "log.txt"
        self.path.write_bytes(b"commit 1\nline\n")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_nopager_copies_file_through(self) -> None:
        with mock.patch.object(sys, "stdout", _fake_stdout()), mock.patch(
            "cag.cli.copy_through"
        ) as copy_mock, mock.patch("cag.cli.run_pager") as run_pager:
            cli.main([str(self.path), "--nopager"])

        run_pager.assert_not_called()
        source, out_fd = copy_mock.call_args.args
        self.assertEqual(source.name, str(self.path))
        self.assertEqual(out_fd, 1)
        self.assertTrue(source.closed)

    def test_non_tty_output_copies_through(self) -> None:
        with mock.patch.object(sys, "stdout", _fake_stdout()), mock.patch(
            "cag.cli.os.isatty", return_value=False
        ), mock.patch("cag.cli.copy_through") as copy_mock, mock.patch("cag.cli.run_pager") as run_pager:
            cli.main([str(self.path)])

        copy_mock.assert_called_once()
        run_pager.assert_not_called()

    def test_tty_output_runs_pager_with_cli_settings(self) -> None:
        with mock.patch.object(sys, "stdout", _fake_stdout()), mock.patch(
            "cag.cli.os.isatty", return_value=True
        ), mock.patch.dict("os.environ", {"ENABLE_TRACING": "0"}), mock.patch("cag.cli.run_pager") as run_pager:
            cli.main([str(self.path), "--no-color", "--style", "friendly", "--batch-factor", "2"])

        run_pager.assert_called_once()
        source, cfg = run_pager.call_args.args
        self.assertEqual(source.name, str(self.path))
        self.assertEqual(run_pager.call_args.kwargs, {"out_fd": 1})
        self.assertTrue(cfg.no_color)
        self.assertEqual(cfg.style, "friendly")
        self.assertEqual(cfg.batch_factor, 2)
        self.assertFalse(cfg.tracing_enabled)

    def test_pager_errors_exit_with_message(self) -> None:
        with mock.patch.object(sys, "stdout", _fake_stdout()), mock.patch(
            "cag.cli.os.isatty", return_value=True
        ), mock.patch("cag.cli.run_pager", side_effect=StartupTimeoutError(1.0)):
            with self.assertRaises(SystemExit) as raised:
                cli.main([str(self.path)])

        self.assertEqual(str(raised.exception), "cag: Timeout while waiting for input stream (1s)")

    def test_missing_path_exits(self) -> None:
        with self.assertRaises(SystemExit) as raised:
            cli.main([str(self.path) + ".missing"])
        self.assertIn("Path not found", str(raised.exception))

    def test_interactive_stdin_without_path_exits(self) -> None:
        fake_stdin = mock.Mock(isatty=mock.Mock(return_value=True))
        with mock.patch.object(sys, "stdin", fake_stdin), mock.patch("cag.cli.run_pager") as run_pager:
            with self.assertRaises(SystemExit):
                cli.main([])
        run_pager.assert_not_called()

    def test_piped_stdin_is_read_as_bytes(self) -> None:
        fake_stdin = mock.Mock(isatty=mock.Mock(return_value=False), buffer=mock.sentinel.buffer)
        with mock.patch.object(sys, "stdin", fake_stdin), mock.patch.object(
            sys, "stdout", _fake_stdout()
        ), mock.patch("cag.cli.os.isatty", return_value=False), mock.patch("cag.cli.copy_through") as copy_mock:
            cli.main([])

        copy_mock.assert_called_once_with(mock.sentinel.buffer, 1)


class CopyThroughTests(unittest.TestCase):
    def test_copies_all_bytes(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            copy_through(io.BytesIO(b"a\nb\n"), write_fd)
            os.close(write_fd)
            write_fd = -1
            self.assertEqual(os.read(read_fd, 100), b"a\nb\n")
        finally:
            os.close(read_fd)
            if write_fd >= 0:
                os.close(write_fd)


if __name__ == "__main__":
    unittest.main()
