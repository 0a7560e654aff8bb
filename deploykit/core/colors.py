from __future__ import annotations

import sys
from typing import TextIO


class Style:  # type: ignore
    RESET_ALL = "\033[0m"
    BRIGHT = "\033[1m"
    DIM = "\033[2m"


class Fore:  # type: ignore
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


def color_text(text: str, color: str) -> str:
    if not color:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def step(message: str) -> None:
    """Print a `>>>` progress line, flushed so it interleaves with child output."""
    print(f">>> {message}", flush=True)


def warn(message: str, stream: TextIO | None = None) -> None:
    print(color_text(f"[WARN] {message}", Fore.YELLOW), file=stream or sys.stderr)


def error(message: str, stream: TextIO | None = None) -> None:
    print(color_text(f"[ERROR] {message}", Fore.RED), file=stream or sys.stderr)
