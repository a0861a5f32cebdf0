"""Per-step validation for the deployment wizard.

Each validator looks only at the fields its own page collects and returns the
complete error map for that page. An empty map means the step is satisfied.
"""

from collections.abc import Callable

from deployment_wizard.core.exceptions import InvalidStepError
from deployment_wizard.core.schema import FIELD_MESSAGES, check_field
from deployment_wizard.models.deployment import DeploymentDraft
from deployment_wizard.models.wizard import StepInfo

FieldErrors = dict[str, str]

STEPS: tuple[StepInfo, ...] = (
    StepInfo(
        index=0,
        key="general_info",
        title="General Info",
        description="Provide basic project details",
    ),
    StepInfo(
        index=1,
        key="service_selection",
        title="Service Selection",
        description="Choose the type of service",
    ),
    StepInfo(
        index=2,
        key="configuration",
        title="Configuration",
        description="Set up service-specific options",
    ),
    StepInfo(
        index=3,
        key="review",
        title="Review & Deploy",
        description="Confirm and launch your service",
    ),
)

STEP_COUNT = len(STEPS)
LAST_STEP_INDEX = STEP_COUNT - 1


def _check_fields(record: DeploymentDraft, fields: tuple[str, ...]) -> FieldErrors:
    """Run every field check; never stop at the first failure."""
    payload = record.to_payload()
    errors: FieldErrors = {}
    for field in fields:
        message = check_field(field, payload.get(field))
        if message:
            errors[field] = message
    return errors


def validate_general_info(record: DeploymentDraft) -> FieldErrors:
    return _check_fields(record, ("projectName", "owner", "environment"))


def validate_service_selection(record: DeploymentDraft) -> FieldErrors:
    return _check_fields(record, ("serviceType",))


def validate_dynamic_config(record: DeploymentDraft) -> FieldErrors:
    """Check the configuration of whichever variant is selected.

    Without a selected service type there is nothing valid to configure, so
    the step fails closed.
    """
    if record.service_type == "database":
        return _check_fields(record, ("engine", "storageSize"))
    if record.service_type == "webapp":
        # publicAccess falls back to false when left untouched
        return _check_fields(record, ("framework",))
    return {"serviceType": FIELD_MESSAGES["serviceType"]}


def validate_review(record: DeploymentDraft) -> FieldErrors:
    # Reaching review implies every earlier step passed
    return {}


_VALIDATORS: dict[int, Callable[[DeploymentDraft], FieldErrors]] = {
    0: validate_general_info,
    1: validate_service_selection,
    2: validate_dynamic_config,
    3: validate_review,
}


def get_step(step_index: int) -> StepInfo:
    """Return the step at an index."""
    if not 0 <= step_index < STEP_COUNT:
        raise InvalidStepError(step_index)
    return STEPS[step_index]


def validate_step(step_index: int, record: DeploymentDraft) -> FieldErrors:
    """Validate the fields collected by one step.

    Raises:
        InvalidStepError: if the index is outside the wizard.
    """
    validator = _VALIDATORS.get(step_index)
    if validator is None:
        raise InvalidStepError(step_index)
    return validator(record)
