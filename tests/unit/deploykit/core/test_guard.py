import io
import subprocess
import unittest
from contextlib import redirect_stderr

from deploykit.core.guard import run_guarded
from deploykit.errors import ConfigError


class TestRunGuarded(unittest.TestCase):
    def test_success_returns_zero(self):
        self.assertEqual(run_guarded(lambda: None), 0)

    def test_called_process_error_keeps_return_code(self):
        def _job():
            raise subprocess.CalledProcessError(7, ["docker", "push", "img:tag"])

        err = io.StringIO()
        with redirect_stderr(err):
            code = run_guarded(_job)

        self.assertEqual(code, 7)
        self.assertIn("docker push img:tag", err.getvalue())

    def test_domain_error_returns_one(self):
        def _job():
            raise ConfigError("broken config")

        err = io.StringIO()
        with redirect_stderr(err):
            code = run_guarded(_job)

        self.assertEqual(code, 1)
        self.assertIn("[ERROR] broken config", err.getvalue())

    def test_unexpected_errors_propagate(self):
        def _job():
            raise ValueError("bug")

        with self.assertRaises(ValueError):
            run_guarded(_job)


if __name__ == "__main__":
    unittest.main()
