from __future__ import annotations

from typing import Mapping

from deploykit.core.colors import step
from deploykit.docker import build_image, docker_login, push_image, resolve_docker_env
from deploykit.environment import CiEnvironment

BUILD_DOCKERFILE = "Dockerfile.build"
BUILD_TAG = "build"


def build_image_reference(env: CiEnvironment) -> str:
    """The per-branch build image: <registry image>/<branch slug>:build."""
    return f"{env.registry_image}/{env.commit_ref_slug}:{BUILD_TAG}"


def run_bootstrap(
    env: CiEnvironment,
    process_env: Mapping[str, str],
    dockerfile: str = BUILD_DOCKERFILE,
    context: str = ".",
    push: bool = True,
) -> str:
    """
    Build (and push) the image later jobs run in, with the toolchain preinstalled.

    Registry login only happens when CI credentials are present, so the
    command also works against a local daemon.
    """
    docker_env = resolve_docker_env(process_env)

    if env.registry_user:
        step("Logging in to the container registry with CI credentials...")
        docker_login(
            env.registry, env.registry_user, env.registry_password, env=docker_env
        )

    reference = build_image_reference(env)
    step(f"Building build image '{reference}' from {dockerfile}...")
    build_image(reference, dockerfile=dockerfile, context=context, env=docker_env)

    if push:
        step(f"Pushing '{reference}'...")
        push_image(reference, env=docker_env)
    else:
        step("Push skipped (--no-push)")

    return reference


__all__ = ["BUILD_DOCKERFILE", "build_image_reference", "run_bootstrap"]
