"""Display rows for the review step."""

from typing import Any

from deployment_wizard.models.deployment import SERVICE_TYPES, DeploymentDraft
from deployment_wizard.models.wizard import ReviewField

LABELS: dict[str, str] = {
    "projectName": "Project Name",
    "owner": "Owner",
    "environment": "Environment",
    "serviceType": "Service Type",
    "engine": "Database Engine",
    "storageSize": "Storage Size",
    "framework": "Framework",
    "publicAccess": "Public Access",
}

DISPLAY_VALUES: dict[str, str] = {
    "dev": "Development",
    "staging": "Staging",
    "prod": "Production",
    "database": "Database",
    "webapp": "Web App",
    "postgres": "PostgreSQL",
    "mysql": "MySQL",
    "nextjs": "Next.js",
    "nuxt": "Nuxt",
    "python": "Python",
}

_COMMON_KEYS = ("projectName", "owner", "environment", "serviceType")
_VARIANT_KEYS = {
    "database": ("engine", "storageSize"),
    "webapp": ("framework", "publicAccess"),
}


def format_value(value: Any) -> str:
    """Render a field value the way the review page shows it."""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        number = int(value) if float(value).is_integer() else value
        return f"{number} GB"
    if isinstance(value, str):
        return DISPLAY_VALUES.get(value, value)
    return str(value)


def review_summary(record: DeploymentDraft) -> list[ReviewField]:
    """Rows for the common fields and the selected variant only."""
    payload = record.to_payload()
    keys = _COMMON_KEYS
    if record.service_type in SERVICE_TYPES:
        keys += _VARIANT_KEYS[record.service_type]

    return [
        ReviewField(key=key, label=LABELS[key], value=format_value(payload[key]))
        for key in keys
        if key in payload
    ]
