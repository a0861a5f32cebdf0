"""Wizard state models."""

from typing import Any

from pydantic import BaseModel, Field

from deployment_wizard.models.deployment import DeploymentDraft


class StepInfo(BaseModel):
    """One page of the wizard."""

    index: int
    key: str
    title: str
    description: str


class WizardState(BaseModel):
    """Mutable wizard state, owned by the controller."""

    current_step_index: int = 0
    record: DeploymentDraft = Field(default_factory=DeploymentDraft)
    field_errors: dict[str, str] = Field(default_factory=dict)


class WizardSnapshot(BaseModel):
    """Read-only view of a wizard handed to the rendering layer."""

    current_step_index: int
    step: StepInfo
    steps: list[StepInfo]
    record: dict[str, Any]
    field_errors: dict[str, str]
    is_review: bool
    can_retreat: bool


class ReviewField(BaseModel):
    """A labelled value shown on the review step."""

    key: str
    label: str
    value: str
