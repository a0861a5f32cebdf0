"""Submission state models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class SubmissionStatus(str, Enum):
    """Lifecycle of a submission attempt."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmissionOutcome(BaseModel):
    """Terminal result of one attempt."""

    status: SubmissionStatus
    message: str
    payload: dict[str, Any] | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SubmissionStatus.SUCCEEDED

    @classmethod
    def success(
        cls, message: str, payload: dict[str, Any] | None = None
    ) -> "SubmissionOutcome":
        return cls(status=SubmissionStatus.SUCCEEDED, message=message, payload=payload)

    @classmethod
    def failure(cls, message: str) -> "SubmissionOutcome":
        return cls(status=SubmissionStatus.FAILED, message=message)


class SubmissionState(BaseModel):
    """The single banner state shown against the selected backend."""

    status: SubmissionStatus = SubmissionStatus.IDLE
    last_message: str = ""
    last_payload: dict[str, Any] | None = None

    @classmethod
    def from_outcome(cls, outcome: SubmissionOutcome) -> "SubmissionState":
        return cls(
            status=outcome.status,
            last_message=outcome.message,
            last_payload=outcome.payload,
        )
