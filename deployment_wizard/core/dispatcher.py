"""Submission dispatcher.

Hands a validated deployment record to one backend and reports a single
terminal outcome. Backend faults never escape: they become failed outcomes
carrying the backend's own diagnostic text.
"""

import time
from collections.abc import Mapping
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from pydantic import BaseModel

from deployment_wizard.backends.registry import BackendRegistry, get_backend_registry
from deployment_wizard.core.exceptions import RecordValidationError
from deployment_wizard.core.schema import record_payload, validate_full
from deployment_wizard.models.submission import SubmissionOutcome
from deployment_wizard.utils.logging import get_logger

logger = get_logger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed. Please check your input."


class SubmissionDispatcher:
    """Validates, stamps and writes a record through a named backend."""

    def __init__(self, registry: BackendRegistry | None = None):
        self.registry = registry if registry is not None else get_backend_registry()

    async def submit(
        self,
        record: BaseModel | Mapping[str, Any],
        backend_id: str,
    ) -> SubmissionOutcome:
        """Run one submission attempt.

        The record is validated again here whatever the caller has already
        checked. Exactly one backend call is made, and only for a valid
        record. There is no retry; call again for a new attempt.
        """
        backend = self.registry.get(backend_id)
        if backend is None:
            logger.warning("submission.unknown_backend", backend=backend_id)
            return SubmissionOutcome.failure(f"Unknown submission backend: {backend_id}")

        try:
            validated = validate_full(record)
        except RecordValidationError as exc:
            logger.info(
                "submission.rejected",
                backend=backend_id,
                fields=sorted(exc.field_errors),
            )
            return SubmissionOutcome.failure(VALIDATION_FAILED_MESSAGE)
        except Exception:
            logger.error("submission.invalid_record", backend=backend_id, exc_info=True)
            return SubmissionOutcome.failure(VALIDATION_FAILED_MESSAGE)

        payload = {
            **record_payload(validated),
            "createdAt": datetime.now(timezone.utc),
        }

        start_time = time.perf_counter()
        try:
            written = await backend.write(payload)
        except Exception as exc:
            logger.error(
                "submission.failed",
                backend=backend_id,
                project=validated.project_name,
                error=str(exc),
                exc_info=True,
            )
            return SubmissionOutcome.failure(backend.failure_message(exc))

        logger.info(
            "submission.succeeded",
            backend=backend_id,
            project=validated.project_name,
            environment=validated.environment,
            service_type=validated.service_type,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return SubmissionOutcome.success(backend.success_message(validated), written)


# Singleton instance
_dispatcher: SubmissionDispatcher | None = None


@lru_cache
def get_submission_dispatcher() -> SubmissionDispatcher:
    """Get the dispatcher singleton."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = SubmissionDispatcher()
    return _dispatcher
