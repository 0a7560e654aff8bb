from __future__ import annotations

import shlex
import subprocess
from typing import Callable

from deploykit.core.colors import error
from deploykit.errors import DeployKitError


def run_guarded(job: Callable[[], object]) -> int:
    """
    Run a command body and turn the failures it is expected to hit into an
    exit code: the child's code for a failed subprocess, 1 for domain errors.
    """
    try:
        job()
    except subprocess.CalledProcessError as e:
        cmd = shlex.join(e.cmd) if isinstance(e.cmd, list) else str(e.cmd)
        error(f"'{cmd}' exited with status {e.returncode}")
        return e.returncode or 1
    except DeployKitError as e:
        error(str(e))
        return 1
    return 0
