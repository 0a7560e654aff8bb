from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from deploykit.client_config import api_url_for_branch, render_client_config
from deploykit.config import DeployConfig
from deploykit.coordinates import (
    ImageCoordinates,
    missing_inputs,
    resolve_image_coordinates,
)
from deploykit.core.colors import step, warn
from deploykit.docker import build_image, docker_login, push_image, resolve_docker_env
from deploykit.environment import CiEnvironment


def prepare_client_config(
    env: CiEnvironment,
    config: DeployConfig,
    deploy_dir: Optional[str] = None,
    process_env: Optional[Mapping[str, str]] = None,
) -> Path:
    deploy_path = Path(deploy_dir or config.deploy_dir)
    api_url = api_url_for_branch(env, config, process_env)
    if api_url:
        step(f"Rendering client config for API {api_url}...")
    else:
        step(f"No API URL bound to branch '{env.commit_ref_slug}', keeping placeholder")
    return render_client_config(deploy_path, api_url)


def run_image_build(
    env: CiEnvironment,
    config: DeployConfig,
    process_env: Mapping[str, str],
    deploy_dir: Optional[str] = None,
    dockerfile: Optional[str] = None,
    context: str = ".",
    client_config: bool = True,
    push: bool = True,
) -> ImageCoordinates:
    """Render the client config, then build and push the application image."""
    if client_config:
        prepare_client_config(env, config, deploy_dir, process_env)

    coords = resolve_image_coordinates(env)
    step(f"Image coordinate: {coords.reference}")
    missing = missing_inputs(env)
    if missing:
        warn(
            f"Image coordinate '{coords.reference}' has an empty segment, "
            f"empty variables: {', '.join(missing)}"
        )

    docker_env = resolve_docker_env(process_env)
    docker_login(env.registry, env.registry_user, env.registry_password, env=docker_env)
    build_image(coords.reference, dockerfile=dockerfile, context=context, env=docker_env)

    if push:
        push_image(coords.reference, env=docker_env)
    else:
        step("Push skipped (--no-push)")

    return coords


__all__ = ["prepare_client_config", "run_image_build"]
