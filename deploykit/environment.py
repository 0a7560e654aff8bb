from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

# Field name -> CI variable it is read from.
VARIABLES = {
    "registry": "CI_REGISTRY",
    "registry_user": "CI_REGISTRY_USER",
    "registry_password": "CI_REGISTRY_PASSWORD",
    "registry_image": "CI_REGISTRY_IMAGE",
    "commit_ref_slug": "CI_COMMIT_REF_SLUG",
    "commit_sha": "CI_COMMIT_SHA",
    "commit_tag": "CI_COMMIT_TAG",
    "application_repository": "CI_APPLICATION_REPOSITORY",
    "application_tag": "CI_APPLICATION_TAG",
    "deploy_token": "DEPLOY_TOKEN",
    "deploy_endpoint": "DEPLOY_ENDPOINT",
    "staging_api_url": "STAGING_API_URL",
    "production_api_url": "PRODUCTION_API_URL",
    "docker_host": "DOCKER_HOST",
    "kubernetes_port": "KUBERNETES_PORT",
}


@dataclass(frozen=True)
class CiEnvironment:
    """
    Snapshot of the CI variables deploykit consumes.

    Unset variables are stored as "" so that "unset" and "set but empty"
    behave the same, like ${VAR:-default} in the job scripts this replaces.
    """

    registry: str = ""
    registry_user: str = ""
    registry_password: str = ""
    registry_image: str = ""
    commit_ref_slug: str = ""
    commit_sha: str = ""
    commit_tag: str = ""
    application_repository: str = ""
    application_tag: str = ""
    deploy_token: str = ""
    deploy_endpoint: str = ""
    staging_api_url: str = ""
    production_api_url: str = ""
    docker_host: str = ""
    kubernetes_port: str = ""

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "CiEnvironment":
        values = {f.name: mapping.get(VARIABLES[f.name]) or "" for f in fields(cls)}
        return cls(**values)

    @classmethod
    def from_env(cls) -> "CiEnvironment":
        return cls.from_mapping(os.environ)

    @property
    def is_tag_build(self) -> bool:
        return bool(self.commit_tag)

    def lookup(self, variable: str) -> str:
        """Return the value of a CI variable by its name, e.g. "STAGING_API_URL"."""
        for name, var in VARIABLES.items():
            if var == variable:
                return getattr(self, name)
        raise KeyError(variable)
