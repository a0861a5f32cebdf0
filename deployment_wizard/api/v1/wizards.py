"""Wizard session endpoints."""

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from deployment_wizard.api.deps import SessionsDep, WizardSessionDep
from deployment_wizard.core.exceptions import RecordValidationError
from deployment_wizard.core.review import review_summary
from deployment_wizard.core.session import WizardSession
from deployment_wizard.models.submission import SubmissionState, SubmissionStatus
from deployment_wizard.models.wizard import ReviewField, WizardSnapshot

router = APIRouter()


class CreateSessionRequest(BaseModel):
    """Request to start a wizard."""

    backend: str | None = None


class EditRecordRequest(BaseModel):
    """Field edits keyed by field name, applied in order."""

    changes: dict[str, Any] = Field(default_factory=dict)


class SelectBackendRequest(BaseModel):
    """Request to target another backend."""

    backend: str


class SessionResponse(BaseModel):
    """API response model for a wizard session."""

    session_id: UUID
    created_at: datetime
    updated_at: datetime

    wizard: WizardSnapshot
    review: list[ReviewField] = Field(default_factory=list)

    backend: str
    submission: SubmissionState
    can_submit: bool

    @classmethod
    def from_session(cls, session: WizardSession) -> "SessionResponse":
        """Create response from a session."""
        wizard = session.wizard
        review = review_summary(wizard.record) if wizard.is_review else []
        can_submit = wizard.is_review and session.submission.status not in (
            SubmissionStatus.IN_PROGRESS,
            SubmissionStatus.SUCCEEDED,
        )

        return cls(
            session_id=session.id,
            created_at=session.created_at,
            updated_at=session.updated_at,
            wizard=wizard.snapshot(),
            review=review,
            backend=session.backend_id,
            submission=session.submission.model_copy(),
            can_submit=can_submit,
        )


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a deployment wizard",
)
async def create_session(
    sessions: SessionsDep,
    data: CreateSessionRequest | None = None,
) -> SessionResponse:
    """Create a wizard session positioned on the first step."""
    session = await sessions.create_session(backend_id=data.backend if data else None)
    return SessionResponse.from_session(session)


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    summary="Get wizard state",
)
async def get_session(session: WizardSessionDep) -> SessionResponse:
    """Return the current step, record, errors and submission state."""
    return SessionResponse.from_session(session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Abandon a wizard",
)
async def delete_session(session: WizardSessionDep, sessions: SessionsDep) -> None:
    """Discard the session and everything entered in it."""
    await sessions.delete_session(session.id)


@router.patch(
    "/{session_id}/record",
    response_model=SessionResponse,
    summary="Edit record fields",
)
async def edit_record(
    session: WizardSessionDep,
    data: EditRecordRequest,
) -> SessionResponse:
    """Apply field edits. Nothing is validated until the next advance."""
    session.wizard.edit_many(data.changes)
    session.touch()
    return SessionResponse.from_session(session)


@router.post(
    "/{session_id}/advance",
    response_model=SessionResponse,
    summary="Go to the next step",
)
async def advance(session: WizardSessionDep) -> SessionResponse:
    """Validate the current step and move forward if it passes."""
    advanced = session.wizard.advance()
    session.touch()
    if not advanced:
        raise RecordValidationError(session.wizard.field_errors)
    return SessionResponse.from_session(session)


@router.post(
    "/{session_id}/retreat",
    response_model=SessionResponse,
    summary="Go to the previous step",
)
async def retreat(session: WizardSessionDep) -> SessionResponse:
    """Move back one step without validating."""
    session.wizard.retreat()
    session.touch()
    return SessionResponse.from_session(session)


@router.post(
    "/{session_id}/restart",
    response_model=SessionResponse,
    summary="Restart the wizard",
)
async def restart(session: WizardSessionDep) -> SessionResponse:
    """Clear the record and any submission result."""
    session.restart()
    return SessionResponse.from_session(session)


@router.put(
    "/{session_id}/backend",
    response_model=SessionResponse,
    summary="Select submission backend",
)
async def select_backend(
    session: WizardSessionDep,
    data: SelectBackendRequest,
) -> SessionResponse:
    """Target another backend; any previous result is cleared."""
    session.select_backend(data.backend)
    return SessionResponse.from_session(session)


@router.post(
    "/{session_id}/submit",
    response_model=SessionResponse,
    summary="Submit the deployment",
)
async def submit(session: WizardSessionDep) -> SessionResponse:
    """Run one submission attempt against the selected backend.

    Backend failures are reported in ``submission``; only attempts that may
    not start at all are rejected with 409.
    """
    await session.deploy()
    return SessionResponse.from_session(session)
