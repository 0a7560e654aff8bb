import tempfile
import unittest
from pathlib import Path

from deploykit.core.discovery import discover_commands, resolve_command_module


class TestDiscovery(unittest.TestCase):
    def _touch(self, path: Path, content: str = "") -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def test_discover_commands_finds_packages_with_main(self):
        with tempfile.TemporaryDirectory() as td:
            pkg = Path(td) / "deploykit"

            # Dispatcher exists but must NOT be treated as a command
            self._touch(pkg / "__main__.py", "# dispatcher\n")
            self._touch(pkg / "deploy" / "__main__.py", "# cmd\n")
            self._touch(pkg / "image" / "__main__.py", "# cmd\n")
            self._touch(pkg / "core" / "app.py", "# not a command\n")

            modules = {c.module for c in discover_commands(pkg)}

            self.assertEqual(modules, {"deploykit.deploy", "deploykit.image"})

    def test_discover_commands_ignores_pycache(self):
        with tempfile.TemporaryDirectory() as td:
            pkg = Path(td) / "deploykit"
            self._touch(pkg / "__main__.py", "# dispatcher\n")
            self._touch(pkg / "x" / "__pycache__" / "__main__.py", "# ignored\n")

            modules = {c.module for c in discover_commands(pkg)}
            self.assertNotIn("deploykit.x.__pycache__", modules)

    def test_nested_command_has_folder(self):
        with tempfile.TemporaryDirectory() as td:
            pkg = Path(td) / "deploykit"
            self._touch(pkg / "registry" / "login" / "__main__.py", "# cmd\n")

            (cmd,) = discover_commands(pkg)
            self.assertEqual(cmd.folder, "registry")
            self.assertEqual(cmd.name, "login")
            self.assertEqual(cmd.subcommand, "registry login")
            self.assertEqual(cmd.module, "deploykit.registry.login")

    def test_resolve_command_module_longest_prefix_wins(self):
        with tempfile.TemporaryDirectory() as td:
            pkg = Path(td) / "deploykit"
            self._touch(pkg / "__main__.py", "# dispatcher\n")
            self._touch(pkg / "registry" / "__main__.py", "# cmd\n")
            self._touch(pkg / "registry" / "login" / "__main__.py", "# cmd\n")

            module, remaining = resolve_command_module(
                pkg, ["registry", "login", "--foo", "bar"]
            )
            self.assertEqual(module, "deploykit.registry.login")
            self.assertEqual(remaining, ["--foo", "bar"])

    def test_positional_argument_is_left_to_the_command(self):
        with tempfile.TemporaryDirectory() as td:
            pkg = Path(td) / "deploykit"
            self._touch(pkg / "deploy" / "__main__.py", "# cmd\n")

            module, remaining = resolve_command_module(
                pkg, ["deploy", "staging", "--dry-run"]
            )
            self.assertEqual(module, "deploykit.deploy")
            self.assertEqual(remaining, ["staging", "--dry-run"])

    def test_resolve_command_module_returns_none_when_not_found(self):
        with tempfile.TemporaryDirectory() as td:
            pkg = Path(td) / "deploykit"
            self._touch(pkg / "__main__.py", "# dispatcher\n")

            module, remaining = resolve_command_module(pkg, ["nope", "--x"])
            self.assertIsNone(module)
            self.assertEqual(remaining, ["nope", "--x"])

    def test_real_package_exposes_the_ci_commands(self):
        import deploykit

        pkg = Path(deploykit.__file__).resolve().parent
        modules = {c.module for c in discover_commands(pkg)}
        self.assertTrue(
            {
                "deploykit.bootstrap",
                "deploykit.coordinates",
                "deploykit.deploy",
                "deploykit.image",
            }.issubset(modules)
        )


if __name__ == "__main__":
    unittest.main()
