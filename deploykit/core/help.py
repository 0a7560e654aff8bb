from __future__ import annotations

import subprocess
import sys
import textwrap
from pathlib import Path
from typing import List

from deploykit.core.colors import Fore, Style, color_text
from deploykit.core.discovery import discover_commands


def format_command_help(
    name: str, description: str, indent: int = 2, col_width: int = 24, width: int = 80
) -> str:
    prefix = " " * indent + f"{name:<{col_width - indent}}"
    wrapper = textwrap.TextWrapper(
        width=width, initial_indent=prefix, subsequent_indent=" " * col_width
    )
    return wrapper.fill(description)


def extract_description_via_help(module: str) -> str:
    """
    Best-effort: run "python -m <module> --help" and return the first paragraph
    after the usage block, or "-" when nothing usable comes back.
    """
    try:
        result = subprocess.run(
            [sys.executable, "-m", module, "--help"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return "-"

    return first_paragraph_after_usage(result.stdout or "")


def first_paragraph_after_usage(help_text: str) -> str:
    out = help_text.splitlines()
    seen_usage = False
    for i, line in enumerate(out):
        if line.strip().startswith("usage:"):
            seen_usage = True
            continue
        if not seen_usage:
            continue
        if not line.strip():
            for j in range(i + 1, len(out)):
                desc = out[j].strip()
                if desc:
                    return desc
            break
    return "-"


def print_global_help(package_dir: Path) -> None:
    commands = discover_commands(package_dir)

    print(color_text("deploykit", Fore.CYAN + Style.BRIGHT))
    print()
    print(color_text("Build, push and deploy container images from CI jobs", Style.DIM))
    print()
    print(
        color_text(
            "Usage: deploykit "
            "[--log <LOG_DIR>] "
            "[--help-all] "
            "[-h|--help] "
            "<command> [options]",
            Fore.GREEN,
        )
    )
    print()
    print(color_text("Options:", Style.BRIGHT))
    print(
        color_text(
            "  --log <LOG_DIR>   Log all command output to <LOG_DIR>/<timestamp>.log",
            Fore.YELLOW,
        )
    )
    print(
        color_text("  --help-all        Show full --help for all commands", Fore.YELLOW)
    )
    print(
        color_text("  -h, --help        Show this help message and exit", Fore.YELLOW)
    )
    print()
    print(color_text("Available commands:", Style.BRIGHT))
    print()

    current_folder: str | None = None
    for cmd in commands:
        if cmd.folder != current_folder:
            if cmd.folder:
                print(color_text(f"{cmd.folder}/", Fore.MAGENTA))
            current_folder = cmd.folder

        desc = extract_description_via_help(cmd.module)
        print(format_command_help(cmd.name, desc, indent=2))

    print()


def show_full_help_for_all(package_dir: Path) -> None:
    commands = discover_commands(package_dir)

    print(color_text("deploykit - full help overview", Fore.CYAN + Style.BRIGHT))
    print()

    for cmd in commands:
        file_path = str(cmd.main_path.relative_to(package_dir.parent))
        print(color_text("=" * 80, Fore.BLUE + Style.BRIGHT))
        print(color_text(f"Subcommand: {cmd.subcommand}", Fore.YELLOW + Style.BRIGHT))
        print(color_text(f"File: {file_path}", Fore.CYAN))
        print(color_text("-" * 80, Fore.BLUE))

        try:
            result = subprocess.run(
                [sys.executable, "-m", cmd.module, "--help"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            print(color_text(f"Failed to get help for {file_path}: {e}", Fore.RED))
            continue

        if result.stdout:
            print(result.stdout.rstrip())
        if result.stderr:
            print(color_text(result.stderr.rstrip(), Fore.RED))
        print()


def show_help_for_directory(package_dir: Path, dir_parts: List[str]) -> bool:
    """
    If deploykit/<dir_parts>/ is a directory, show commands directly below it.
    """
    candidate_dir = package_dir.joinpath(*dir_parts)
    if not candidate_dir.is_dir():
        return False

    commands = discover_commands(package_dir)
    prefix = "/".join(dir_parts)

    shown = False
    for cmd in commands:
        if (cmd.folder or "") == prefix:
            if not shown:
                print(
                    color_text(
                        f"Overview of commands in: {prefix}", Fore.CYAN + Style.BRIGHT
                    )
                )
                print()
            desc = extract_description_via_help(cmd.module)
            print(format_command_help(cmd.name, desc, indent=2))
            shown = True

    return shown
