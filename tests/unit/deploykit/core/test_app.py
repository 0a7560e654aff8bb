import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from deploykit.core.app import main as app_main
from deploykit.core.app import parse_flags


class TestParseFlags(unittest.TestCase):
    def test_log_dir_is_consumed(self):
        argv = ["deploykit", "--log", "/tmp/logs", "deploy", "staging"]
        flags = parse_flags(argv)
        self.assertEqual(flags.log_dir, Path("/tmp/logs"))
        self.assertTrue(flags.log_enabled)
        self.assertEqual(argv, ["deploykit", "deploy", "staging"])

    def test_log_without_dir_exits(self):
        with self.assertRaises(SystemExit) as cm:
            parse_flags(["deploykit", "--log", "--help-all"])
        self.assertEqual(cm.exception.code, 2)

    def test_flags_after_command_belong_to_command(self):
        argv = ["deploykit", "deploy", "staging", "--log", "x"]
        flags = parse_flags(argv)
        self.assertFalse(flags.log_enabled)
        self.assertEqual(argv, ["deploykit", "deploy", "staging", "--log", "x"])

    def test_help_all(self):
        argv = ["deploykit", "--help-all"]
        flags = parse_flags(argv)
        self.assertTrue(flags.help_all)
        self.assertEqual(argv, ["deploykit"])


class TestAppMain(unittest.TestCase):
    def _run_main(self, argv):
        old_argv = sys.argv
        try:
            sys.argv = argv
            with self.assertRaises(SystemExit) as cm:
                app_main()
            return cm.exception.code
        finally:
            sys.argv = old_argv

    @patch(
        "deploykit.core.app.resolve_command_module",
        return_value=("deploykit.deploy", ["staging"]),
    )
    @patch("deploykit.core.app.run_command_once", return_value=True)
    def test_dispatches_to_resolved_module(self, mock_run, _mock_resolve):
        code = self._run_main(["deploykit", "deploy", "staging"])

        self.assertEqual(code, 0)
        full_cmd = mock_run.call_args.args[0]
        self.assertEqual(full_cmd[1:], ["-m", "deploykit.deploy", "staging"])
        self.assertFalse(mock_run.call_args.args[1].log_enabled)

    @patch("deploykit.core.app.resolve_command_module", return_value=(None, ["nope"]))
    def test_unknown_command_exits_1(self, _mock_resolve):
        self.assertEqual(self._run_main(["deploykit", "nope"]), 1)

    @patch("deploykit.core.app.print_global_help")
    def test_global_help(self, mock_help):
        self.assertEqual(self._run_main(["deploykit", "--help"]), 0)
        self.assertTrue(mock_help.called)

    @patch("deploykit.core.app.print_global_help")
    def test_no_arguments_prints_help(self, mock_help):
        self.assertEqual(self._run_main(["deploykit"]), 0)
        self.assertTrue(mock_help.called)

    @patch(
        "deploykit.core.app.resolve_command_module",
        return_value=("deploykit.image", []),
    )
    @patch("deploykit.core.app.run_command_once", return_value=True)
    def test_log_flag_opens_log_file(self, mock_run, _mock_resolve):
        with tempfile.TemporaryDirectory() as td:
            code = self._run_main(["deploykit", "--log", td, "image"])

            self.assertEqual(code, 0)
            cfg = mock_run.call_args.args[1]
            log_file = mock_run.call_args.args[2]
            self.assertTrue(cfg.log_enabled)
            self.assertIsNotNone(log_file)
            self.assertTrue(log_file.closed)
            self.assertEqual(len(list(Path(td).glob("*.log"))), 1)

    @patch(
        "deploykit.core.app.resolve_command_module",
        return_value=("deploykit.image", []),
    )
    @patch("deploykit.core.app.run_command_once", side_effect=KeyboardInterrupt)
    def test_ctrl_c_exits_130(self, _mock_run, _mock_resolve):
        self.assertEqual(self._run_main(["deploykit", "image"]), 130)


if __name__ == "__main__":
    unittest.main()
