"""Custom exceptions for the deployment wizard."""

from typing import Any


class WizardError(Exception):
    """Base exception for the deployment wizard."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class RecordValidationError(WizardError):
    """A record failed validation; carries every failing field at once."""

    status_code = 422

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        super().__init__(
            "Validation failed. Please check your input.",
            {"field_errors": self.field_errors},
        )


class UnknownFieldError(WizardError):
    """Edit targeted a field that no variant declares."""

    status_code = 422

    def __init__(self, field_name: str):
        super().__init__(
            f"Unknown field: {field_name}",
            {"field": field_name},
        )
        self.field_name = field_name


class InvalidFieldValueError(WizardError):
    """Edit value is not a single text, number or boolean."""

    status_code = 422

    def __init__(self, field_name: str):
        super().__init__(
            f"Field {field_name} takes a single text, number or boolean value",
            {"field": field_name},
        )
        self.field_name = field_name


class InvalidStepError(WizardError):
    """Step index outside the wizard."""

    status_code = 400

    def __init__(self, step_index: int):
        super().__init__(
            f"Invalid wizard step: {step_index}",
            {"step_index": step_index},
        )


class SessionNotFoundError(WizardError):
    """Wizard session not found or expired."""

    status_code = 404

    def __init__(self, session_id: str):
        super().__init__(
            f"Wizard session not found: {session_id}",
            {"session_id": session_id},
        )


class UnknownBackendError(WizardError):
    """No backend is registered under the requested identifier."""

    status_code = 404

    def __init__(self, backend_id: str):
        super().__init__(
            f"Unknown submission backend: {backend_id}",
            {"backend": backend_id},
        )
        self.backend_id = backend_id


class SubmissionRejectedError(WizardError):
    """A submission attempt may not start in the current state."""

    status_code = 409


class BackendError(WizardError):
    """A backend write failed."""

    def __init__(self, backend: str, message: str):
        super().__init__(message, {"backend": backend})
        self.backend = backend


class BackendConfigurationError(BackendError):
    """A backend is missing required configuration."""

    pass
