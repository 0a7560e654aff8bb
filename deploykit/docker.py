from __future__ import annotations

import shlex
import subprocess
from typing import Dict, List, Mapping, Optional

from deploykit.core.colors import step

FALLBACK_DOCKER_HOST = "tcp://localhost:2375"


def _run(
    cmd: List[str],
    *,
    env: Optional[Mapping[str, str]] = None,
    stdin_text: Optional[str] = None,
) -> subprocess.CompletedProcess:
    print(">>> " + shlex.join(cmd), flush=True)
    return subprocess.run(
        cmd,
        check=True,
        env=dict(env) if env is not None else None,
        input=stdin_text,
        text=True,
    )


def docker_available(env: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if `docker info` succeeds against the configured daemon."""
    try:
        result = subprocess.run(
            ["docker", "info"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError:
        return False
    return result.returncode == 0


def resolve_docker_env(
    base: Mapping[str, str], available: Optional[bool] = None
) -> Dict[str, str]:
    """
    Return the process environment for docker calls.

    When the daemon is not reachable, no DOCKER_HOST is configured and the job
    runs inside Kubernetes (KUBERNETES_PORT set), the docker-in-docker service
    listens on localhost:2375 instead of the default socket.
    """
    env = dict(base)
    if available is None:
        available = docker_available(env)
    if available:
        return env

    if not env.get("DOCKER_HOST") and env.get("KUBERNETES_PORT"):
        step(f"Docker daemon not reachable, using DOCKER_HOST={FALLBACK_DOCKER_HOST}")
        env["DOCKER_HOST"] = FALLBACK_DOCKER_HOST
    return env


def docker_login(
    registry: str,
    user: str,
    password: str,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    # --password-stdin keeps the secret out of the process list and the log
    _run(
        ["docker", "login", "-u", user, "--password-stdin", registry],
        env=env,
        stdin_text=password,
    )


def build_image(
    reference: str,
    dockerfile: Optional[str] = None,
    context: str = ".",
    env: Optional[Mapping[str, str]] = None,
) -> None:
    cmd = ["docker", "build"]
    if dockerfile:
        cmd += ["-f", dockerfile]
    cmd += ["--tag", reference, context]
    _run(cmd, env=env)


def push_image(reference: str, env: Optional[Mapping[str, str]] = None) -> None:
    _run(["docker", "push", reference], env=env)
