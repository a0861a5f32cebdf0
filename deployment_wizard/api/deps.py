"""Dependency injection for API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from deployment_wizard.backends.registry import BackendRegistry, get_backend_registry
from deployment_wizard.core.exceptions import SessionNotFoundError
from deployment_wizard.core.session import SessionManager, WizardSession, get_session_manager


async def get_sessions() -> SessionManager:
    """Get the session manager."""
    return get_session_manager()


async def get_backends() -> BackendRegistry:
    """Get the backend registry."""
    return get_backend_registry()


async def get_session_by_id(
    session_id: UUID,
    sessions: Annotated[SessionManager, Depends(get_sessions)],
) -> WizardSession:
    """Get a wizard session by ID or raise 404."""
    session = await sessions.get_session(session_id)
    if not session:
        raise SessionNotFoundError(str(session_id))
    return session


# Type aliases for cleaner signatures
SessionsDep = Annotated[SessionManager, Depends(get_sessions)]
BackendsDep = Annotated[BackendRegistry, Depends(get_backends)]
WizardSessionDep = Annotated[WizardSession, Depends(get_session_by_id)]
