from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from deploykit.errors import ConfigError

CONFIG_ENV_VAR = "DEPLOYKIT_CONFIG"
DEFAULT_CONFIG_FILE = "deploykit.yml"
DEFAULT_DEPLOY_DIR = "target/deploy"

ENVIRONMENT_KEYS = {"branch", "name", "port", "image_port", "api_url_variable", "url"}


@dataclass(frozen=True)
class DeployEnvironment:
    key: str
    branch: str
    name: str
    port: int
    image_port: int = 80
    api_url_variable: str = ""
    url: str = ""


@dataclass(frozen=True)
class DeployConfig:
    deploy_dir: str = DEFAULT_DEPLOY_DIR
    environments: Dict[str, DeployEnvironment] = field(default_factory=dict)

    def environment(self, key: str) -> DeployEnvironment:
        try:
            return self.environments[key]
        except KeyError:
            known = ", ".join(sorted(self.environments)) or "<none>"
            raise ConfigError(
                f"Unknown environment '{key}' (known: {known})"
            ) from None

    def environment_for_branch(self, branch: str) -> Optional[DeployEnvironment]:
        for env in self.environments.values():
            if env.branch == branch:
                return env
        return None


DEFAULT_ENVIRONMENTS: Dict[str, Dict[str, Any]] = {
    "staging": {
        "branch": "staging",
        "name": "staging-client",
        "port": 5002,
        "image_port": 80,
        "api_url_variable": "STAGING_API_URL",
    },
    "production": {
        "branch": "production",
        "name": "production-client",
        "port": 5003,
        "image_port": 80,
        "api_url_variable": "PRODUCTION_API_URL",
    },
}


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping at top-level in {path}, got {type(data).__name__}"
        )
    return data


def _as_int(key: str, field_name: str, value: Any) -> int:
    # YAML "true" would otherwise become port 1
    if isinstance(value, bool):
        raise ConfigError(
            f"environments.{key}.{field_name} must be an integer, got {value!r}"
        )
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(
            f"environments.{key}.{field_name} must be an integer, got {value!r}"
        ) from None


def _build_environment(key: str, raw: Any) -> DeployEnvironment:
    if not isinstance(raw, dict):
        raise ConfigError(f"environments.{key} must be a mapping")

    unknown = set(raw) - ENVIRONMENT_KEYS
    if unknown:
        raise ConfigError(
            f"environments.{key} has unknown keys: {', '.join(sorted(unknown))}"
        )

    defaults = DEFAULT_ENVIRONMENTS.get(key, {})
    merged = {**defaults, **raw}

    for required in ("name", "port"):
        if merged.get(required) in (None, ""):
            raise ConfigError(f"environments.{key}.{required} is required")

    return DeployEnvironment(
        key=key,
        branch=str(merged.get("branch") or key),
        name=str(merged["name"]),
        port=_as_int(key, "port", merged["port"]),
        image_port=_as_int(key, "image_port", merged.get("image_port", 80)),
        api_url_variable=str(merged.get("api_url_variable") or ""),
        url=str(merged.get("url") or ""),
    )


def build_config(data: Dict[str, Any]) -> DeployConfig:
    """Merge a parsed deploykit.yml mapping over the built-in defaults."""
    raw_envs = data.get("environments") or {}
    if not isinstance(raw_envs, dict):
        raise ConfigError("'environments' must be a mapping")

    keys = list(DEFAULT_ENVIRONMENTS)
    keys += [k for k in raw_envs if k not in DEFAULT_ENVIRONMENTS]
    # "staging:" with no body means "defaults"
    environments = {key: _build_environment(key, raw_envs.get(key) or {}) for key in keys}

    return DeployConfig(
        deploy_dir=str(data.get("deploy_dir") or DEFAULT_DEPLOY_DIR),
        environments=environments,
    )


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path(DEFAULT_CONFIG_FILE)


def load_config(path: Optional[str] = None) -> DeployConfig:
    """
    Load deploy settings.

    Precedence for the file: explicit path, then $DEPLOYKIT_CONFIG, then
    ./deploykit.yml. A missing file yields the built-in defaults, unless the
    path was given explicitly.
    """
    config_path = resolve_config_path(path)
    if path and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    return build_config(load_yaml(config_path))
