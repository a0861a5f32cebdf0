"""Core functionality for the deployment wizard."""

from deployment_wizard.core.exceptions import (
    BackendConfigurationError,
    BackendError,
    InvalidFieldValueError,
    InvalidStepError,
    RecordValidationError,
    SessionNotFoundError,
    SubmissionRejectedError,
    UnknownBackendError,
    UnknownFieldError,
    WizardError,
)
from deployment_wizard.core.session import SessionManager, WizardSession, get_session_manager
from deployment_wizard.core.wizard import DeploymentWizard

__all__ = [
    "WizardError",
    "RecordValidationError",
    "UnknownFieldError",
    "InvalidFieldValueError",
    "InvalidStepError",
    "SessionNotFoundError",
    "UnknownBackendError",
    "SubmissionRejectedError",
    "BackendError",
    "BackendConfigurationError",
    "SessionManager",
    "WizardSession",
    "get_session_manager",
    "DeploymentWizard",
]
