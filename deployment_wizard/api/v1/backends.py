"""Submission backend listing."""

from fastapi import APIRouter
from pydantic import BaseModel

from deployment_wizard.api.deps import BackendsDep
from deployment_wizard.config import settings

router = APIRouter()


class BackendInfo(BaseModel):
    """A selectable submission backend."""

    name: str
    label: str
    is_default: bool = False


@router.get(
    "",
    response_model=list[BackendInfo],
    summary="List submission backends",
)
async def list_backends(backends: BackendsDep) -> list[BackendInfo]:
    """Return every backend a wizard session can submit to."""
    return [
        BackendInfo(
            name=backend.name,
            label=backend.label,
            is_default=backend.name == settings.default_backend,
        )
        for backend in backends.list_backends()
    ]
