from __future__ import annotations

from typing import Optional

import requests

from deploykit.config import DeployEnvironment
from deploykit.coordinates import resolve_image_coordinates
from deploykit.core.colors import step, warn
from deploykit.environment import CiEnvironment
from deploykit.webhook import DEFAULT_TIMEOUT, DeployRequest, trigger_deploy


def build_deploy_request(env: CiEnvironment, target: DeployEnvironment) -> DeployRequest:
    coords = resolve_image_coordinates(env)
    return DeployRequest(
        name=target.name,
        port=target.port,
        image=coords.reference,
        token=env.deploy_token,
        image_port=target.image_port,
    )


def run_deploy(
    env: CiEnvironment,
    target: DeployEnvironment,
    endpoint: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    fail_on_status: bool = False,
    dry_run: bool = False,
) -> DeployRequest:
    """Ask the deploy endpoint to roll out the current image to target."""
    request = build_deploy_request(env, target)

    if not request.token:
        warn("DEPLOY_TOKEN is empty")

    if dry_run:
        step(f"Dry run, not posting to {endpoint}:")
        for key, value in request.masked_form():
            print(f"    {key}={value}")
        return request

    step(f"Deploying {request.image} as '{target.name}' via {endpoint}...")
    response = trigger_deploy(
        endpoint,
        request,
        session=session,
        timeout=timeout,
        fail_on_status=fail_on_status,
    )
    step(f"Deploy endpoint answered HTTP {response.status_code}")
    if target.url:
        step(f"Environment URL: {target.url}")
    return request


__all__ = ["build_deploy_request", "run_deploy"]
