"""Wizard sessions: one wizard, one submission state, one selected backend."""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from uuid import UUID, uuid4

from deployment_wizard.config import settings
from deployment_wizard.core.dispatcher import (
    VALIDATION_FAILED_MESSAGE,
    SubmissionDispatcher,
    get_submission_dispatcher,
)
from deployment_wizard.core.exceptions import (
    RecordValidationError,
    SubmissionRejectedError,
    UnknownBackendError,
)
from deployment_wizard.core.wizard import DeploymentWizard
from deployment_wizard.models.submission import (
    SubmissionOutcome,
    SubmissionState,
    SubmissionStatus,
)
from deployment_wizard.utils.logging import get_logger

logger = get_logger(__name__)

INTERRUPTED_MESSAGE = "Submission was interrupted before it finished. Please try again."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WizardSession:
    """Pairs a wizard with the status of its submission attempts.

    At most one attempt is in flight per session, and a succeeded session
    cannot be submitted again until the backend is switched or the wizard is
    restarted.
    """

    def __init__(
        self,
        dispatcher: SubmissionDispatcher | None = None,
        backend_id: str | None = None,
    ):
        self.id: UUID = uuid4()
        self.created_at = _utcnow()
        self.updated_at = self.created_at
        self.wizard = DeploymentWizard()
        self.dispatcher = dispatcher or get_submission_dispatcher()
        self.backend_id = backend_id or settings.default_backend
        self.submission = SubmissionState()

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def select_backend(self, backend_id: str) -> None:
        """Target another backend and clear any previous result.

        Raises:
            UnknownBackendError: if no backend has that name.
            SubmissionRejectedError: while an attempt is in flight.
        """
        if backend_id not in self.dispatcher.registry:
            raise UnknownBackendError(backend_id)
        if self.submission.status == SubmissionStatus.IN_PROGRESS:
            raise SubmissionRejectedError(
                "Cannot switch backend while a submission is in progress",
                {"backend": self.backend_id},
            )

        self.backend_id = backend_id
        self.submission = SubmissionState()
        self.touch()

    def restart(self) -> None:
        """Throw away the record and any submission result."""
        if self.submission.status == SubmissionStatus.IN_PROGRESS:
            raise SubmissionRejectedError(
                "Cannot restart while a submission is in progress",
                {"backend": self.backend_id},
            )
        self.wizard.reset()
        self.submission = SubmissionState()
        self.touch()

    def _ensure_can_deploy(self) -> None:
        if not self.wizard.is_review:
            raise SubmissionRejectedError(
                "Deployment is only available from the review step",
                {"step": self.wizard.current_step_index},
            )
        if self.submission.status == SubmissionStatus.IN_PROGRESS:
            raise SubmissionRejectedError(
                "A submission is already in progress",
                {"backend": self.backend_id},
            )
        if self.submission.status == SubmissionStatus.SUCCEEDED:
            raise SubmissionRejectedError(
                "This deployment has already been submitted",
                {"backend": self.backend_id},
            )

    async def _attempt(self, backend_id: str) -> SubmissionOutcome:
        try:
            record = self.wizard.completed_record()
        except RecordValidationError:
            return SubmissionOutcome.failure(VALIDATION_FAILED_MESSAGE)
        return await self.dispatcher.submit(record, backend_id)

    async def deploy(self) -> SubmissionOutcome:
        """Run one submission attempt against the selected backend.

        If the attempt is cancelled or raises, it is recorded as failed before
        the exception propagates.

        Raises:
            SubmissionRejectedError: if an attempt may not start now.
        """
        self._ensure_can_deploy()
        # Claimed before the first await so a second caller sees it
        self.submission = SubmissionState(status=SubmissionStatus.IN_PROGRESS)
        self.touch()
        backend_id = self.backend_id

        logger.info("session.deploy_started", session_id=str(self.id), backend=backend_id)

        try:
            outcome = await self._attempt(backend_id)
        except BaseException:
            # Release the claim so the session stays usable
            self.submission = SubmissionState(
                status=SubmissionStatus.FAILED,
                last_message=INTERRUPTED_MESSAGE,
            )
            self.touch()
            logger.warning(
                "session.deploy_interrupted",
                session_id=str(self.id),
                backend=backend_id,
                exc_info=True,
            )
            raise

        self.submission = SubmissionState.from_outcome(outcome)
        self.touch()

        logger.info(
            "session.deploy_finished",
            session_id=str(self.id),
            backend=backend_id,
            status=outcome.status.value,
        )
        return outcome


class SessionManager:
    """Manages wizard sessions in memory.

    In-progress wizards are never persisted; a session lives until it is
    deleted or its TTL runs out.
    """

    def __init__(
        self,
        ttl_hours: int | None = None,
        dispatcher: SubmissionDispatcher | None = None,
    ):
        self._sessions: dict[UUID, WizardSession] = {}
        self._dispatcher = dispatcher
        self._ttl = timedelta(
            hours=settings.session_ttl_hours if ttl_hours is None else ttl_hours
        )

    def _is_expired(self, session: WizardSession, now: datetime) -> bool:
        return now - session.created_at > self._ttl

    async def create_session(self, backend_id: str | None = None) -> WizardSession:
        """Create a new wizard session."""
        await self.cleanup_expired()
        session = WizardSession(dispatcher=self._dispatcher)
        if backend_id is not None:
            session.select_backend(backend_id)
        self._sessions[session.id] = session
        logger.info(
            "session.created",
            session_id=str(session.id),
            backend=session.backend_id,
        )
        return session

    async def get_session(self, session_id: UUID) -> WizardSession | None:
        """Get a session by ID."""
        session = self._sessions.get(session_id)
        if session and self._is_expired(session, _utcnow()):
            del self._sessions[session_id]
            return None
        return session

    async def delete_session(self, session_id: UUID) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    async def cleanup_expired(self) -> int:
        """Remove expired sessions. Returns count of removed sessions."""
        now = _utcnow()
        expired = [
            sid
            for sid, session in self._sessions.items()
            if self._is_expired(session, now)
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("session.expired_removed", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        """Remove all sessions (primarily for tests)."""
        self._sessions.clear()


# Singleton instance
_session_manager: SessionManager | None = None


@lru_cache
def get_session_manager() -> SessionManager:
    """Get the session manager singleton."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager
