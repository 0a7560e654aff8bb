from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class Command:
    """
    A command is a sub-package of deploykit/ that contains __main__.py.

    Example:
      deploykit/deploy/__main__.py -> parts=("deploy",), module="deploykit.deploy"
    """

    parts: Tuple[str, ...]  # relative path parts under the package dir
    module: str  # python -m module
    main_path: Path  # filesystem path to __main__.py

    @property
    def folder(self) -> str | None:
        if len(self.parts) <= 1:
            return None
        return "/".join(self.parts[:-1])

    @property
    def name(self) -> str:
        return self.parts[-1]

    @property
    def subcommand(self) -> str:
        return " ".join(self.parts)


def _module_name(package_dir: Path, parts: Tuple[str, ...] | List[str]) -> str:
    return ".".join([package_dir.name, *parts])


def discover_commands(package_dir: Path) -> List[Command]:
    """
    Recursively find all sub-packages under package_dir that contain __main__.py.
    """
    commands: List[Command] = []

    for root, dirnames, filenames in os.walk(package_dir):
        dirnames[:] = [d for d in dirnames if d != "__pycache__"]

        if "__main__.py" not in filenames:
            continue

        root_path = Path(root)
        rel = root_path.relative_to(package_dir)
        if rel.parts == ():
            # the package's own __main__.py is the dispatcher
            continue

        parts = tuple(rel.parts)
        commands.append(
            Command(
                parts=parts,
                module=_module_name(package_dir, parts),
                main_path=root_path / "__main__.py",
            )
        )

    commands.sort(key=lambda c: (c.folder or "", c.name))
    return commands


def resolve_command_module(
    package_dir: Path, argv_parts: List[str]
) -> tuple[str | None, List[str]]:
    """
    Resolve the longest argv prefix that matches a discovered command module.

    Returns:
      (module, remaining_args)

    Example:
      argv_parts=["deploy", "staging", "--dry-run"]
      -> ("deploykit.deploy", ["staging", "--dry-run"])
    """
    for n in range(len(argv_parts), 0, -1):
        prefix = argv_parts[:n]
        if any(p.startswith("-") or p in (".", "..") for p in prefix):
            continue
        candidate_dir = package_dir.joinpath(*prefix)
        if candidate_dir.is_dir() and (candidate_dir / "__main__.py").is_file():
            return _module_name(package_dir, prefix), argv_parts[n:]
    return None, argv_parts
