"""Unit tests for submission backends."""

from collections import defaultdict
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest

from deployment_wizard.backends.firestore import FirestoreBackend
from deployment_wizard.backends.mongodb import MongoBackend
from deployment_wizard.backends.raw import RawOutputBackend
from deployment_wizard.backends.registry import (
    BackendRegistry,
    create_default_registry,
)
from deployment_wizard.core.dispatcher import SubmissionDispatcher
from deployment_wizard.core.exceptions import BackendConfigurationError
from deployment_wizard.core.schema import validate_full
from deployment_wizard.models.submission import SubmissionStatus


class FakeFirestoreCollection:
    def __init__(self, documents: list[dict[str, Any]], error: Exception | None):
        self.documents = documents
        self.error = error

    async def add(self, document_data: dict[str, Any]):
        if self.error is not None:
            raise self.error
        self.documents.append(document_data)
        return None, SimpleNamespace(id=f"doc-{len(self.documents)}")


class FakeFirestoreClient:
    def __init__(self, error: Exception | None = None):
        self.collections: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.error = error
        self.closed = False

    def collection(self, name: str) -> FakeFirestoreCollection:
        return FakeFirestoreCollection(self.collections[name], self.error)

    def close(self) -> None:
        self.closed = True


class FakeMongoCollection:
    def __init__(self):
        self.documents: list[dict[str, Any]] = []

    async def insert_one(self, document: dict[str, Any]):
        document["_id"] = f"oid-{len(self.documents)}"
        self.documents.append(document)
        return SimpleNamespace(inserted_id=document["_id"])


class FakeMongoClient:
    def __init__(self):
        self.databases: dict[str, dict[str, FakeMongoCollection]] = defaultdict(
            lambda: defaultdict(FakeMongoCollection)
        )
        self.closed = False

    def __getitem__(self, name: str) -> dict[str, FakeMongoCollection]:
        return self.databases[name]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def payload(database_fields: dict[str, Any]) -> dict[str, Any]:
    return {**database_fields, "createdAt": datetime(2024, 5, 1, tzinfo=timezone.utc)}


class TestFirestoreBackend:
    """Tests for FirestoreBackend."""

    @pytest.mark.asyncio
    async def test_adds_document(self, payload: dict[str, Any]):
        client = FakeFirestoreClient()
        backend = FirestoreBackend(client=client, collection="deployments")

        result = await backend.write(payload)

        assert result is None
        assert client.collections["deployments"] == [payload]

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        client = FakeFirestoreClient()
        backend = FirestoreBackend(client=client)

        await backend.close()

        assert client.closed is True
        assert backend._client is None

    def test_messages(self, database_fields: dict[str, Any]):
        backend = FirestoreBackend(client=FakeFirestoreClient())
        record = validate_full(database_fields)

        assert backend.success_message(record) == (
            'Service "svc-a" has been successfully deployed to dev!'
        )
        assert backend.failure_message(RuntimeError("permission denied")) == (
            "Failed to save to Firestore: permission denied"
        )

    @pytest.mark.asyncio
    async def test_fault_reported_through_dispatcher(self, database_fields: dict[str, Any]):
        registry = BackendRegistry()
        registry.register(
            FirestoreBackend(client=FakeFirestoreClient(error=RuntimeError("quota exceeded")))
        )

        outcome = await SubmissionDispatcher(registry).submit(database_fields, "firestore")

        assert outcome.status == SubmissionStatus.FAILED
        assert outcome.message == "Failed to save to Firestore: quota exceeded"


class TestMongoBackend:
    """Tests for MongoBackend."""

    @pytest.mark.asyncio
    async def test_inserts_document(self, payload: dict[str, Any]):
        client = FakeMongoClient()
        backend = MongoBackend(client=client, database="wizard", collection="deployments")

        await backend.write(payload)

        stored = client["wizard"]["deployments"].documents
        assert len(stored) == 1
        assert stored[0]["projectName"] == "svc-a"
        # The caller's payload is not modified by the driver
        assert "_id" not in payload

    @pytest.mark.asyncio
    async def test_missing_uri(self, payload: dict[str, Any]):
        backend = MongoBackend(uri="")

        with pytest.raises(BackendConfigurationError):
            await backend.write(payload)

    @pytest.mark.asyncio
    async def test_missing_uri_through_dispatcher(self, database_fields: dict[str, Any]):
        registry = BackendRegistry()
        registry.register(MongoBackend(uri=""))

        outcome = await SubmissionDispatcher(registry).submit(database_fields, "mongodb")

        assert outcome.status == SubmissionStatus.FAILED
        assert outcome.message == (
            "Failed to save to MongoDB Atlas. Check your connection string."
        )

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        client = FakeMongoClient()
        backend = MongoBackend(client=client)

        await backend.close()
        await backend.close()

        assert client.closed is True
        assert backend._client is None

    def test_success_message(self, database_fields: dict[str, Any]):
        backend = MongoBackend(client=FakeMongoClient())

        message = backend.success_message(validate_full(database_fields))

        assert message == (
            'Service "svc-a" has been successfully deployed to dev! (saved to MongoDB)'
        )


class TestRawOutputBackend:
    """Tests for RawOutputBackend."""

    @pytest.mark.asyncio
    async def test_returns_json_payload(self, payload: dict[str, Any]):
        result = await RawOutputBackend().write(payload)

        assert result is not None
        assert result["createdAt"].startswith("2024-05-01T00:00:00")
        assert result["storageSize"] == 10
        assert isinstance(payload["createdAt"], datetime)


class TestBackendRegistry:
    """Tests for BackendRegistry."""

    def test_default_registry(self):
        registry = create_default_registry()

        assert [backend.name for backend in registry.list_backends()] == [
            "firestore",
            "mongodb",
            "raw",
        ]
        assert "raw" in registry
        assert registry.get("ftp") is None

    def test_register_overwrites(self):
        registry = BackendRegistry()
        first = RawOutputBackend()
        second = RawOutputBackend()

        registry.register(first)
        registry.register(second)

        assert registry.get("raw") is second
        assert len(registry.list_backends()) == 1

    @pytest.mark.asyncio
    async def test_close_all_continues_past_failures(self):
        class BrokenBackend(RawOutputBackend):
            @property
            def name(self) -> str:
                return "broken"

            async def close(self) -> None:
                raise RuntimeError("already closed")

        mongo_client = FakeMongoClient()
        registry = BackendRegistry()
        registry.register(BrokenBackend())
        registry.register(MongoBackend(client=mongo_client))

        await registry.close_all()

        assert mongo_client.closed is True
