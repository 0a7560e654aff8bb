import io
import unittest
from contextlib import redirect_stdout

from deploykit.core.colors import Fore, Style, color_text, error, step, warn


class TestColors(unittest.TestCase):
    def test_color_text_wraps_and_resets(self):
        self.assertEqual(color_text("x", Fore.RED), f"{Fore.RED}x{Style.RESET_ALL}")

    def test_color_text_without_color_is_plain(self):
        self.assertEqual(color_text("x", ""), "x")

    def test_step_prefix(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            step("Pushing")
        self.assertEqual(buf.getvalue(), ">>> Pushing\n")

    def test_warn_and_error_write_to_given_stream(self):
        stream = io.StringIO()
        warn("careful", stream)
        error("broken", stream)
        self.assertIn("[WARN] careful", stream.getvalue())
        self.assertIn("[ERROR] broken", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
