"""Raw output backend: validates and returns the payload without storing it."""

from typing import Any

from pydantic_core import to_jsonable_python

from deployment_wizard.backends.base import DeploymentBackend
from deployment_wizard.models.deployment import DeploymentBase


class RawOutputBackend(DeploymentBackend):
    """Returns the exact payload a persisting backend would receive."""

    @property
    def name(self) -> str:
        return "raw"

    @property
    def label(self) -> str:
        return "Raw Result"

    async def write(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        return to_jsonable_python(payload)

    def success_message(self, record: DeploymentBase) -> str:
        return (
            f'Service "{record.project_name}" validated for {record.environment}. '
            "Raw payload shown below."
        )

    def failure_message(self, exc: Exception) -> str:
        return f"Validation failed: {exc}"
