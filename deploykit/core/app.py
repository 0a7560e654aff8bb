from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

from deploykit.core.colors import Fore, Style, color_text
from deploykit.core.discovery import resolve_command_module
from deploykit.core.help import (
    print_global_help,
    show_full_help_for_all,
    show_help_for_directory,
)
from deploykit.core.run import RunConfig, open_log_file, run_command_once


@dataclass
class Flags:
    log_dir: Path | None = None
    help_all: bool = False

    @property
    def log_enabled(self) -> bool:
        return self.log_dir is not None


def parse_flags(argv: List[str]) -> Flags:
    """
    Strip the dispatcher's own flags from argv (in place) and return them.

    Only flags placed before the command are consumed; everything after the
    command name belongs to the command.
    """
    flags = Flags()

    i = 1  # skip argv[0] (program name)
    while i < len(argv):
        token = argv[i]
        if token == "--help-all":
            flags.help_all = True
            del argv[i]
        elif token == "--log":
            if i + 1 >= len(argv) or argv[i + 1].startswith("-"):
                print(color_text("--log requires a <LOG_DIR> argument!", Fore.RED))
                raise SystemExit(2)
            flags.log_dir = Path(argv[i + 1])
            del argv[i : i + 2]
        elif token.startswith("-"):
            # -h/--help stay in argv for the help handling below
            i += 1
        else:
            break

    return flags


def main() -> None:
    argv = sys.argv[:]  # keep sys.argv for external tools, but parse on a copy
    flags = parse_flags(argv)
    args = argv[1:]

    package_dir = Path(__file__).resolve().parents[1]  # .../deploykit/core/app.py -> .../deploykit

    if flags.help_all:
        print_global_help(package_dir)
        print(color_text("Full detailed help for all subcommands:", Style.BRIGHT))
        print()
        show_full_help_for_all(package_dir)
        raise SystemExit(0)

    if not args or args[0] in ("-h", "--help"):
        print_global_help(package_dir)
        raise SystemExit(0)

    # Directory-specific help: "<path> -h"
    if len(args) > 1 and args[-1] in ("-h", "--help"):
        if show_help_for_directory(package_dir, args[:-1]):
            raise SystemExit(0)

    module, remaining = resolve_command_module(package_dir, args)
    if not module:
        print(color_text(f"Error: command '{' '.join(args)}' not found.", Fore.RED))
        raise SystemExit(1)

    if remaining and remaining[0] in ("-h", "--help"):
        subprocess.run([sys.executable, "-m", module, remaining[0]])
        raise SystemExit(0)

    log_file = None
    if flags.log_dir is not None:
        log_file, log_path = open_log_file(flags.log_dir)
        print(color_text(f"Tip: Log file created at {log_path}", Fore.GREEN))

    full_cmd = [sys.executable, "-m", module] + remaining
    cfg = RunConfig(log_enabled=flags.log_enabled)

    try:
        run_command_once(full_cmd, cfg, log_file)
        raise SystemExit(0)
    except KeyboardInterrupt:
        print()
        print(color_text("Execution interrupted by user (Ctrl+C).", Fore.YELLOW))
        raise SystemExit(130)
    finally:
        if log_file:
            log_file.close()
