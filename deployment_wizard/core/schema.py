"""Full-record validation for deployment requests.

Validation dispatches on ``serviceType`` and only inspects the fields of the
selected variant. Every violation is collected in one pass and keyed by the
wire (camelCase) field name, so callers can render all errors at once.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, StrictBool, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from deployment_wizard.core.exceptions import RecordValidationError
from deployment_wizard.models.deployment import (
    SERVICE_TYPES,
    DatabaseDeployment,
    DeploymentBase,
    DeploymentDraft,
    DeploymentRecord,
    Engine,
    Environment,
    Framework,
    NonBlankText,
    StorageSize,
    WebAppDeployment,
)

FIELD_MESSAGES: dict[str, str] = {
    "projectName": "Project name is required",
    "owner": "Owner is required",
    "environment": "Environment is required",
    "serviceType": "Please select a service type",
    "engine": "Please select a database engine",
    "storageSize": "Storage size must be greater than 0",
    "framework": "Please select a framework",
    "publicAccess": "Public access must be true or false",
}

# Custom error types whose message is already user-facing
_SELF_DESCRIBING_ERRORS = frozenset({"not_a_number", "not_positive"})

_record_adapter: TypeAdapter[Any] = TypeAdapter(DeploymentRecord)

# Same field types the variant models declare
_FIELD_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    "projectName": TypeAdapter(NonBlankText),
    "owner": TypeAdapter(NonBlankText),
    "environment": TypeAdapter(Environment),
    "engine": TypeAdapter(Engine),
    "storageSize": TypeAdapter(StorageSize),
    "framework": TypeAdapter(Framework),
    "publicAccess": TypeAdapter(StrictBool),
}


def _message_for(field: str, error: Mapping[str, Any]) -> str:
    if error["type"] in _SELF_DESCRIBING_ERRORS:
        return error["msg"]
    return FIELD_MESSAGES.get(field, error["msg"])


def _collect_errors(exc: PydanticValidationError) -> dict[str, str]:
    """Flatten pydantic errors to {wire field: message}, first error wins."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        # Discriminated unions prefix the location with the tag
        names = [part for part in error["loc"] if isinstance(part, str)]
        if not names:
            continue
        field = names[-1]
        errors.setdefault(field, _message_for(field, error))
    return errors


def _as_mapping(record: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """Normalise a record to wire names with unset values dropped."""
    if isinstance(record, DeploymentDraft):
        return record.to_payload()
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True, exclude_none=True)
    return {key: value for key, value in record.items() if value is not None}


def check_field(field: str, value: Any) -> str | None:
    """Check a single wire field in isolation.

    Returns the user-facing message, or None when the value is acceptable.
    """
    if field == "serviceType":
        return None if value in SERVICE_TYPES else FIELD_MESSAGES[field]
    if value is None:
        return FIELD_MESSAGES[field]
    try:
        _FIELD_ADAPTERS[field].validate_python(value)
    except PydanticValidationError as exc:
        return _message_for(field, exc.errors()[0])
    return None


def validate_full(
    record: BaseModel | Mapping[str, Any],
) -> DatabaseDeployment | WebAppDeployment:
    """Validate a complete record against the branch selected by serviceType.

    Fields belonging to the other variant are neither validated nor kept.

    Raises:
        RecordValidationError: with every failing field.
    """
    data = _as_mapping(record)

    if data.get("serviceType") not in SERVICE_TYPES:
        errors = {"serviceType": FIELD_MESSAGES["serviceType"]}
        try:
            DeploymentBase.model_validate(data)
        except PydanticValidationError as exc:
            errors = {**_collect_errors(exc), **errors}
        raise RecordValidationError(errors)

    try:
        return _record_adapter.validate_python(data)
    except PydanticValidationError as exc:
        raise RecordValidationError(_collect_errors(exc)) from None


def record_payload(record: BaseModel) -> dict[str, Any]:
    """Canonical wire form of a validated record; unset fields omitted."""
    return record.model_dump(by_alias=True, exclude_none=True)
