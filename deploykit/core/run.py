from __future__ import annotations

import errno
import os
import pty
import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, TextIO

from deploykit.core.colors import Fore, color_text


@dataclass(frozen=True)
class RunConfig:
    log_enabled: bool


def open_log_file(log_dir: Path) -> tuple[TextIO, Path]:
    """
    Create/open a timestamped log file inside log_dir.

    - log_dir is mandatory (provided via --log <LOG_DIR>)
    - log_dir is created with parents=True if missing
    """
    log_dir = log_dir.expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    log_file_path = log_dir / f"{timestamp}.log"
    fd = os.open(str(log_file_path), os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
    return os.fdopen(fd, "a", encoding="utf-8"), log_file_path


def _run_teed(full_cmd: List[str], log_file: TextIO) -> int:
    # A pty keeps the child line-buffered so the log gets lines as they happen.
    master_fd, slave_fd = pty.openpty()
    proc = subprocess.Popen(
        full_cmd,
        stdin=slave_fd,
        stdout=slave_fd,
        stderr=slave_fd,
        text=True,
    )
    os.close(slave_fd)

    try:
        # docker progress output is not always valid UTF-8
        with os.fdopen(master_fd, encoding="utf-8", errors="replace") as master:
            try:
                for line in master:
                    ts = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
                    log_file.write(f"{ts} {line}")
                    log_file.flush()
                    print(line, end="")
            except OSError as e:
                # EIO signals that the child closed its side of the pty
                if e.errno != errno.EIO:
                    raise
    finally:
        rc = proc.wait()

    return rc


def run_command_once(
    full_cmd: List[str], cfg: RunConfig, log_file: TextIO | None
) -> bool:
    try:
        if cfg.log_enabled and log_file is not None:
            rc = _run_teed(full_cmd, log_file)
        else:
            proc = subprocess.Popen(full_cmd)
            rc = proc.wait()

        if rc != 0:
            raise SystemExit(rc)
        return True

    except SystemExit:
        raise
    except OSError as e:
        print(color_text(f"Exception running command: {e}", Fore.RED))
        raise SystemExit(1)
