from __future__ import annotations


class DeployKitError(RuntimeError):
    """Base class for errors a deploykit command reports and exits on."""


class ConfigError(DeployKitError):
    """Raised when deploykit.yml is malformed or names an unknown environment."""


class ClientConfigError(DeployKitError):
    """Raised when the client config template cannot be rendered."""


class IncompleteCoordinatesError(DeployKitError):
    """Raised in strict mode when a resolved image coordinate has an empty segment."""


class DeployError(DeployKitError):
    """Raised when the deploy webhook cannot be reached or rejects the request."""
