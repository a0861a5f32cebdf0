"""Backend registry for submission targets."""

from functools import lru_cache

from deployment_wizard.backends.base import DeploymentBackend
from deployment_wizard.utils.logging import get_logger

logger = get_logger(__name__)


class BackendRegistry:
    """Registry of submission backends keyed by name."""

    def __init__(self):
        self._backends: dict[str, DeploymentBackend] = {}

    def register(self, backend: DeploymentBackend) -> None:
        """Register a backend instance."""
        if backend.name in self._backends:
            logger.warning("backend_registry.overwriting", backend=backend.name)

        self._backends[backend.name] = backend
        logger.debug("backend_registry.registered", backend=backend.name)

    def get(self, name: str) -> DeploymentBackend | None:
        """Get a backend by name."""
        return self._backends.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._backends

    def list_backends(self) -> list[DeploymentBackend]:
        """List backends in registration order."""
        return list(self._backends.values())

    async def close_all(self) -> None:
        """Close every backend, logging failures instead of stopping."""
        for backend in self._backends.values():
            try:
                await backend.close()
            except Exception as e:
                logger.warning(
                    "backend_registry.close_failed",
                    backend=backend.name,
                    error=str(e),
                )


def create_default_registry() -> BackendRegistry:
    """Registry holding the Firestore, MongoDB and raw output backends."""
    from deployment_wizard.backends.firestore import FirestoreBackend
    from deployment_wizard.backends.mongodb import MongoBackend
    from deployment_wizard.backends.raw import RawOutputBackend

    registry = BackendRegistry()
    registry.register(FirestoreBackend())
    registry.register(MongoBackend())
    registry.register(RawOutputBackend())
    return registry


# Singleton instance
_registry: BackendRegistry | None = None


@lru_cache
def get_backend_registry() -> BackendRegistry:
    """Get the backend registry singleton."""
    global _registry
    if _registry is None:
        _registry = create_default_registry()
    return _registry
