from __future__ import annotations

from dataclasses import dataclass
from shlex import quote
from typing import List

from deploykit.environment import CiEnvironment
from deploykit.errors import IncompleteCoordinatesError


@dataclass(frozen=True)
class ImageCoordinates:
    repository: str
    tag: str

    @property
    def reference(self) -> str:
        return f"{self.repository}:{self.tag}"


def missing_inputs(env: CiEnvironment) -> List[str]:
    """CI variables that are empty but a non-overridden segment is built from."""
    missing: List[str] = []
    if not env.application_repository:
        if not env.registry_image:
            missing.append("CI_REGISTRY_IMAGE")
        if not env.is_tag_build and not env.commit_ref_slug:
            missing.append("CI_COMMIT_REF_SLUG")
    if not env.application_tag and not env.is_tag_build and not env.commit_sha:
        missing.append("CI_COMMIT_SHA")
    return missing


def resolve_image_coordinates(
    env: CiEnvironment, strict: bool = False
) -> ImageCoordinates:
    """
    Compute the (repository, tag) an application image is pushed under.

    Branch build:
      repository = CI_APPLICATION_REPOSITORY or $CI_REGISTRY_IMAGE/$CI_COMMIT_REF_SLUG
      tag        = CI_APPLICATION_TAG or $CI_COMMIT_SHA
    Tag build (CI_COMMIT_TAG set):
      repository = CI_APPLICATION_REPOSITORY or $CI_REGISTRY_IMAGE
      tag        = CI_APPLICATION_TAG or $CI_COMMIT_TAG

    Empty segments are returned as-is and only fail later at push/deploy
    time, unless strict=True.
    """
    if strict:
        missing = missing_inputs(env)
        if missing:
            raise IncompleteCoordinatesError(
                "Cannot resolve image coordinates, empty variables: "
                + ", ".join(missing)
            )

    if env.is_tag_build:
        repository = env.application_repository or env.registry_image
        tag = env.application_tag or env.commit_tag
    else:
        repository = (
            env.application_repository
            or f"{env.registry_image}/{env.commit_ref_slug}"
        )
        tag = env.application_tag or env.commit_sha

    return ImageCoordinates(repository=repository, tag=tag)


def export_lines(coords: ImageCoordinates) -> List[str]:
    """Shell lines publishing the coordinates to later steps of the same job."""
    return [
        f"export CI_APPLICATION_REPOSITORY={quote(coords.repository)}",
        f"export CI_APPLICATION_TAG={quote(coords.tag)}",
    ]


__all__ = [
    "ImageCoordinates",
    "missing_inputs",
    "resolve_image_coordinates",
    "export_lines",
]
