"""Unit tests for the submission dispatcher."""

from datetime import datetime
from typing import Any

import pytest

from conftest import RecordingBackend
from deployment_wizard.backends.registry import BackendRegistry
from deployment_wizard.core.dispatcher import SubmissionDispatcher
from deployment_wizard.core.schema import validate_full
from deployment_wizard.models.submission import SubmissionStatus


class TestSubmissionDispatcher:
    """Tests for SubmissionDispatcher."""

    @pytest.mark.asyncio
    async def test_successful_submission(
        self,
        dispatcher: SubmissionDispatcher,
        recording_backend: RecordingBackend,
        database_fields: dict[str, Any],
    ):
        """A valid record is written through a persisting backend."""
        outcome = await dispatcher.submit(validate_full(database_fields), "recording")

        assert outcome.status == SubmissionStatus.SUCCEEDED
        assert "svc-a" in outcome.message
        assert "dev" in outcome.message
        assert outcome.payload is None
        assert len(recording_backend.payloads) == 1

    @pytest.mark.asyncio
    async def test_payload_shape(
        self,
        dispatcher: SubmissionDispatcher,
        recording_backend: RecordingBackend,
        database_fields: dict[str, Any],
    ):
        await dispatcher.submit(database_fields, "recording")

        payload = recording_backend.payloads[0]
        created_at = payload.pop("createdAt")
        assert isinstance(created_at, datetime)
        assert created_at.tzinfo is not None
        assert payload == database_fields

    @pytest.mark.asyncio
    async def test_other_variant_fields_stripped(
        self,
        dispatcher: SubmissionDispatcher,
        recording_backend: RecordingBackend,
        webapp_fields: dict[str, Any],
    ):
        record = {**webapp_fields, "engine": "postgres", "storageSize": 10, "owner": "ops"}

        await dispatcher.submit(record, "recording")

        payload = recording_backend.payloads[0]
        assert "engine" not in payload
        assert "storageSize" not in payload
        assert payload["owner"] == "ops"

    @pytest.mark.asyncio
    async def test_invalid_record_never_reaches_backend(
        self,
        dispatcher: SubmissionDispatcher,
        recording_backend: RecordingBackend,
    ):
        outcome = await dispatcher.submit({"serviceType": "database", "storageSize": -5}, "recording")

        assert outcome.status == SubmissionStatus.FAILED
        assert outcome.message == "Validation failed. Please check your input."
        assert recording_backend.payloads == []

    @pytest.mark.asyncio
    async def test_garbage_record_becomes_failed_outcome(
        self,
        dispatcher: SubmissionDispatcher,
        recording_backend: RecordingBackend,
    ):
        outcome = await dispatcher.submit(42, "recording")  # type: ignore[arg-type]

        assert outcome.status == SubmissionStatus.FAILED
        assert recording_backend.payloads == []

    @pytest.mark.asyncio
    async def test_backend_fault_becomes_failed_outcome(
        self, database_fields: dict[str, Any]
    ):
        backend = RecordingBackend(fail_with=ConnectionError("connection refused"))
        registry = BackendRegistry()
        registry.register(backend)

        outcome = await SubmissionDispatcher(registry).submit(database_fields, "recording")

        assert outcome.status == SubmissionStatus.FAILED
        assert outcome.message == "Failed to save to Recording: connection refused"
        assert len(backend.payloads) == 1

    @pytest.mark.asyncio
    async def test_no_automatic_retry(self, database_fields: dict[str, Any]):
        backend = RecordingBackend(fail_with=TimeoutError("timed out"))
        registry = BackendRegistry()
        registry.register(backend)
        dispatcher = SubmissionDispatcher(registry)

        await dispatcher.submit(database_fields, "recording")
        await dispatcher.submit(database_fields, "recording")

        assert len(backend.payloads) == 2

    @pytest.mark.asyncio
    async def test_unknown_backend(
        self, dispatcher: SubmissionDispatcher, database_fields: dict[str, Any]
    ):
        outcome = await dispatcher.submit(database_fields, "s3")

        assert outcome.status == SubmissionStatus.FAILED
        assert "s3" in outcome.message

    @pytest.mark.asyncio
    async def test_raw_output_returns_payload(
        self, dispatcher: SubmissionDispatcher, webapp_fields: dict[str, Any]
    ):
        outcome = await dispatcher.submit(webapp_fields, "raw")

        assert outcome.status == SubmissionStatus.SUCCEEDED
        assert "storefront" in outcome.message
        assert "prod" in outcome.message
        assert outcome.payload is not None
        created_at = outcome.payload.pop("createdAt")
        assert isinstance(created_at, str)
        datetime.fromisoformat(created_at)
        assert outcome.payload == webapp_fields

    @pytest.mark.asyncio
    async def test_raw_output_fills_public_access_default(
        self, dispatcher: SubmissionDispatcher, webapp_fields: dict[str, Any]
    ):
        record = {**webapp_fields}
        del record["publicAccess"]

        outcome = await dispatcher.submit(record, "raw")

        assert outcome.payload is not None
        assert outcome.payload["publicAccess"] is False
