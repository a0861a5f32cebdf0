"""Data models for the deployment wizard."""

from deployment_wizard.models.deployment import (
    DatabaseDeployment,
    DeploymentBase,
    DeploymentDraft,
    DeploymentRecord,
    WebAppDeployment,
)
from deployment_wizard.models.submission import (
    SubmissionOutcome,
    SubmissionState,
    SubmissionStatus,
)
from deployment_wizard.models.wizard import (
    ReviewField,
    StepInfo,
    WizardSnapshot,
    WizardState,
)

__all__ = [
    # Deployment models
    "DeploymentBase",
    "DatabaseDeployment",
    "WebAppDeployment",
    "DeploymentRecord",
    "DeploymentDraft",
    # Wizard models
    "StepInfo",
    "WizardState",
    "WizardSnapshot",
    "ReviewField",
    # Submission models
    "SubmissionStatus",
    "SubmissionOutcome",
    "SubmissionState",
]
