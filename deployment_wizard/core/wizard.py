"""Wizard controller for deployment requests."""

from collections.abc import Mapping
from typing import Any

from deployment_wizard.core.exceptions import (
    InvalidFieldValueError,
    RecordValidationError,
    UnknownFieldError,
)
from deployment_wizard.core.schema import validate_full
from deployment_wizard.core.steps import LAST_STEP_INDEX, STEPS, get_step, validate_step
from deployment_wizard.models.deployment import (
    VARIANT_FIELDS,
    DatabaseDeployment,
    DeploymentDraft,
    WebAppDeployment,
)
from deployment_wizard.models.wizard import WizardSnapshot, WizardState
from deployment_wizard.utils.logging import get_logger

logger = get_logger(__name__)

# Every variant-specific attribute, cleared whenever the variant changes
_VARIANT_ATTRIBUTES: tuple[str, ...] = tuple(
    name for names in VARIANT_FIELDS.values() for name in names
)

_SCALAR_TYPES = (str, int, float, bool)


class DeploymentWizard:
    """Owns the wizard state and every transition on it.

    Only this class moves ``current_step_index`` or replaces
    ``field_errors``. The rendering layer reads snapshots and routes edits
    back through :meth:`edit`.
    """

    def __init__(self) -> None:
        self._state = WizardState()
        self._field_names = DeploymentDraft.field_names()

    @property
    def current_step_index(self) -> int:
        return self._state.current_step_index

    @property
    def field_errors(self) -> dict[str, str]:
        return dict(self._state.field_errors)

    @property
    def record(self) -> DeploymentDraft:
        """A copy of the in-progress record."""
        return self._state.record.model_copy()

    @property
    def is_review(self) -> bool:
        return self._state.current_step_index == LAST_STEP_INDEX

    def _check_edit(self, field_name: str, value: Any) -> str:
        attribute = self._field_names.get(field_name)
        if attribute is None:
            raise UnknownFieldError(field_name)
        if value is not None and not isinstance(value, _SCALAR_TYPES):
            raise InvalidFieldValueError(field_name)
        return attribute

    def edit(self, field_name: str, value: Any) -> None:
        """Apply one field edit from the input layer.

        Nothing is validated here. Changing ``serviceType`` clears every
        variant-specific field in the same step so no value typed for one
        variant can reach the other.

        Raises:
            UnknownFieldError: if no variant declares ``field_name``.
            InvalidFieldValueError: if ``value`` is a list, mapping or
                other compound value.
        """
        attribute = self._check_edit(field_name, value)
        record = self._state.record
        if attribute == "service_type" and value != record.service_type:
            for name in _VARIANT_ATTRIBUTES:
                setattr(record, name, None)
            logger.debug(
                "wizard.variant_changed",
                previous=record.service_type,
                selected=value,
            )

        setattr(record, attribute, value)

    def edit_many(self, changes: Mapping[str, Any]) -> None:
        """Apply several edits in order.

        Every name and value is checked before anything is written.
        """
        for field_name, value in changes.items():
            self._check_edit(field_name, value)
        for field_name, value in changes.items():
            self.edit(field_name, value)

    def advance(self) -> bool:
        """Move to the next step if the current one validates.

        Returns:
            True when the current step passed. On the last step there is
            nowhere further to go and nothing changes.
        """
        state = self._state
        if state.current_step_index == LAST_STEP_INDEX:
            return True

        errors = validate_step(state.current_step_index, state.record)
        state.field_errors = errors

        if errors:
            logger.info(
                "wizard.step_rejected",
                step=state.current_step_index,
                fields=sorted(errors),
            )
            return False

        state.current_step_index = min(state.current_step_index + 1, LAST_STEP_INDEX)
        logger.debug("wizard.advanced", step=state.current_step_index)
        return True

    def retreat(self) -> None:
        """Go back one step; always allowed, never validates."""
        state = self._state
        state.current_step_index = max(state.current_step_index - 1, 0)

    def completed_record(self) -> DatabaseDeployment | WebAppDeployment:
        """Return the fully validated record.

        This is the only way a record leaves the wizard.

        Raises:
            RecordValidationError: the failures also replace ``field_errors``.
        """
        try:
            record = validate_full(self._state.record)
        except RecordValidationError as exc:
            self._state.field_errors = dict(exc.field_errors)
            raise
        self._state.field_errors = {}
        return record

    def snapshot(self) -> WizardSnapshot:
        """Read-only copy of the state for display."""
        state = self._state
        return WizardSnapshot(
            current_step_index=state.current_step_index,
            step=get_step(state.current_step_index).model_copy(),
            steps=[step.model_copy() for step in STEPS],
            record=state.record.to_payload(),
            field_errors=dict(state.field_errors),
            is_review=self.is_review,
            can_retreat=state.current_step_index > 0,
        )

    def reset(self) -> None:
        """Start the flow again from an empty record."""
        self._state = WizardState()
