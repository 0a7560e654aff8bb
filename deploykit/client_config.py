from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from deploykit.config import DeployConfig
from deploykit.environment import CiEnvironment
from deploykit.errors import ClientConfigError

TEMPLATE_NAME = "config.example.json"
OUTPUT_NAME = "config.json"
API_URL_PLACEHOLDER = "%API_URL%"


def api_url_for_branch(
    env: CiEnvironment,
    config: DeployConfig,
    process_env: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """
    Return the API URL of the environment deployed from the current branch.

    None when the branch is not bound to an environment, or the environment's
    API URL variable is empty. Variables outside the known CI set (for a
    custom environment) are read from process_env.
    """
    target = config.environment_for_branch(env.commit_ref_slug)
    if target is None or not target.api_url_variable:
        return None
    try:
        value = env.lookup(target.api_url_variable)
    except KeyError:
        value = (process_env or {}).get(target.api_url_variable, "")
    return value or None


def render_client_config(deploy_dir: Path, api_url: Optional[str]) -> Path:
    """
    Turn <deploy_dir>/config.example.json into <deploy_dir>/config.json.

    Every %API_URL% is replaced when api_url is given; otherwise the template
    is moved unchanged. The template does not survive the call.
    """
    template = deploy_dir / TEMPLATE_NAME
    target = deploy_dir / OUTPUT_NAME

    if not template.is_file():
        raise ClientConfigError(f"Client config template not found: {template}")

    content = template.read_text(encoding="utf-8")
    if api_url:
        content = content.replace(API_URL_PLACEHOLDER, api_url)

    target.write_text(content, encoding="utf-8")
    template.unlink()
    return target
