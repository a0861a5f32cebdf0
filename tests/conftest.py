"""Pytest configuration and fixtures."""

import asyncio
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from deployment_wizard.backends.base import DeploymentBackend
from deployment_wizard.backends.raw import RawOutputBackend
from deployment_wizard.backends.registry import BackendRegistry
from deployment_wizard.core.dispatcher import SubmissionDispatcher
from deployment_wizard.core.session import get_session_manager
from deployment_wizard.core.wizard import DeploymentWizard
from deployment_wizard.main import app


class RecordingBackend(DeploymentBackend):
    """Backend that keeps every payload it is given."""

    def __init__(
        self,
        fail_with: Exception | None = None,
        gate: asyncio.Event | None = None,
    ):
        super().__init__()
        self.payloads: list[dict[str, Any]] = []
        self.fail_with = fail_with
        self.gate = gate

    @property
    def name(self) -> str:
        return "recording"

    @property
    def label(self) -> str:
        return "Recording"

    async def write(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return None


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def registry(recording_backend: RecordingBackend) -> BackendRegistry:
    """Registry with the recording and raw output backends."""
    registry = BackendRegistry()
    registry.register(recording_backend)
    registry.register(RawOutputBackend())
    return registry


@pytest.fixture
def dispatcher(registry: BackendRegistry) -> SubmissionDispatcher:
    return SubmissionDispatcher(registry)


@pytest.fixture
def database_fields() -> dict[str, Any]:
    """A complete database deployment, as the input layer sends it."""
    return {
        "projectName": "svc-a",
        "owner": "team-x",
        "environment": "dev",
        "serviceType": "database",
        "engine": "postgres",
        "storageSize": 10,
    }


@pytest.fixture
def webapp_fields() -> dict[str, Any]:
    """A complete web app deployment."""
    return {
        "projectName": "storefront",
        "owner": "team-web",
        "environment": "prod",
        "serviceType": "webapp",
        "framework": "nextjs",
        "publicAccess": True,
    }


@pytest.fixture
def wizard_at_review(database_fields: dict[str, Any]) -> DeploymentWizard:
    """A wizard walked through every step with the database fields."""
    wizard = DeploymentWizard()
    wizard.edit_many(database_fields)
    for _ in range(3):
        assert wizard.advance()
    return wizard


@pytest.fixture
async def client() -> AsyncClient:
    """Create an async test client with a fresh session manager."""
    manager = get_session_manager()
    manager.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    manager.clear()
