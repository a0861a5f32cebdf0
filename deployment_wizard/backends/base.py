"""Base class for submission backends."""

from abc import ABC, abstractmethod
from typing import Any

from deployment_wizard.models.deployment import DeploymentBase
from deployment_wizard.utils.logging import get_logger


class DeploymentBackend(ABC):
    """A place a validated deployment record can be sent.

    Every backend receives the same canonical payload: the validated fields of
    the selected variant plus ``createdAt``. Implementations perform exactly
    one write per call and may raise on any fault; the dispatcher turns
    exceptions into failed outcomes using :meth:`failure_message`.
    """

    def __init__(self) -> None:
        self.logger = get_logger(f"backend.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier used for selection."""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Human-readable name."""
        pass

    @abstractmethod
    async def write(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        """Persist or inspect one payload.

        Returns:
            A JSON-serialisable payload to show the user, or None.
        """
        pass

    async def close(self) -> None:
        """Release any client the backend holds. Called on shutdown."""
        pass

    def success_message(self, record: DeploymentBase) -> str:
        return (
            f'Service "{record.project_name}" has been successfully deployed '
            f"to {record.environment}!"
        )

    def failure_message(self, exc: Exception) -> str:
        return f"Failed to save to {self.label}: {exc}"
