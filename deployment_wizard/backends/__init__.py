"""Submission backends."""

from deployment_wizard.backends.base import DeploymentBackend
from deployment_wizard.backends.registry import (
    BackendRegistry,
    create_default_registry,
    get_backend_registry,
)

__all__ = [
    "DeploymentBackend",
    "BackendRegistry",
    "create_default_registry",
    "get_backend_registry",
]
