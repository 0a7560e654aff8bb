import sys
import unittest
from unittest.mock import patch

import deploykit.__main__ as entrypoint
from deploykit.core import app


class TestEntrypoint(unittest.TestCase):
    def test_entrypoint_calls_core_main(self):
        with patch("deploykit.__main__.main") as mock_main:
            entrypoint.main()
            mock_main.assert_called_once()

    def test_entrypoint_is_the_dispatcher_main(self):
        self.assertIs(entrypoint.main, app.main)

    def test_importing_entrypoint_leaves_sys_path_alone(self):
        before = list(sys.path)
        sys.modules.pop("deploykit.__main__", None)
        import deploykit.__main__  # noqa: F401

        self.assertEqual(sys.path, before)


if __name__ == "__main__":
    unittest.main()
