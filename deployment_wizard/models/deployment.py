"""Deployment record models.

A finished record is a tagged union keyed by ``serviceType``: each variant
carries the common fields plus its own configuration. The in-progress
``DeploymentDraft`` is flat and holds whatever the user has typed so far.
"""

from typing import Annotated, Any, Literal, get_args

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

Environment = Literal["dev", "staging", "prod"]
ServiceType = Literal["database", "webapp"]
Engine = Literal["postgres", "mysql"]
Framework = Literal["nextjs", "nuxt", "python"]

SERVICE_TYPES: tuple[str, ...] = get_args(ServiceType)


def _require_text(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank_text", "Text must not be blank")
    return value


def _require_number(value: Any) -> Any:
    # bool is an int subclass; a checkbox value is never a size
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("not_a_number", "Storage size must be a number")
    return value


def _require_positive(value: int | float) -> int | float:
    if not value > 0:
        raise PydanticCustomError("not_positive", "Storage size must be greater than 0")
    return value


NonBlankText = Annotated[str, AfterValidator(_require_text)]
StorageSize = Annotated[
    int | float,
    BeforeValidator(_require_number),
    AfterValidator(_require_positive),
]


class _RecordModel(BaseModel):
    """Shared config: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class DeploymentBase(_RecordModel):
    """Fields required by every variant."""

    project_name: NonBlankText
    owner: NonBlankText
    environment: Environment


class DatabaseDeployment(DeploymentBase):
    """A managed database service."""

    service_type: Literal["database"]
    engine: Engine
    storage_size: StorageSize  # gigabytes


class WebAppDeployment(DeploymentBase):
    """A hosted web application."""

    service_type: Literal["webapp"]
    framework: Framework
    # Left unset by the user means "not public"
    public_access: StrictBool = False


DeploymentRecord = Annotated[
    DatabaseDeployment | WebAppDeployment,
    Field(discriminator="service_type"),
]

# Attribute names owned by each variant
VARIANT_FIELDS: dict[str, tuple[str, ...]] = {
    "database": ("engine", "storage_size"),
    "webapp": ("framework", "public_access"),
}


class DeploymentDraft(_RecordModel):
    """A partially filled deployment request.

    Values are stored exactly as edited; nothing is coerced or checked until
    a step or the full record is validated.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    project_name: str | None = None
    owner: str | None = None
    environment: Environment | None = None
    service_type: ServiceType | None = None

    # database
    engine: Engine | None = None
    storage_size: int | float | None = None

    # webapp
    framework: Framework | None = None
    public_access: bool | None = None

    @classmethod
    def field_names(cls) -> dict[str, str]:
        """Map both wire and attribute names to attribute names."""
        names: dict[str, str] = {}
        for name, info in cls.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name
        return names

    @classmethod
    def wire_name(cls, attribute: str) -> str:
        """Return the camelCase name of an attribute."""
        return cls.model_fields[attribute].alias or attribute

    def to_payload(self) -> dict[str, Any]:
        """Set fields keyed by wire name, in declaration order."""
        return {
            self.wire_name(name): value
            for name in type(self).model_fields
            if (value := getattr(self, name)) is not None
        }
