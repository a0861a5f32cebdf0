"""Firestore submission backend."""

import inspect
from pathlib import Path
from typing import Any

from google.auth import default as google_auth_default
from google.cloud import firestore
from google.oauth2 import service_account

from deployment_wizard.backends.base import DeploymentBackend
from deployment_wizard.config import settings

SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class FirestoreBackend(DeploymentBackend):
    """Adds each deployment as a new document in a Firestore collection."""

    def __init__(
        self,
        client: firestore.AsyncClient | None = None,
        collection: str | None = None,
    ):
        super().__init__()
        self._client = client
        self.collection = collection or settings.firestore_collection

    @property
    def name(self) -> str:
        return "firestore"

    @property
    def label(self) -> str:
        return "Firestore"

    def _build_credentials(self) -> Any:
        key_path = settings.google_application_credentials
        if key_path and Path(key_path).exists():
            return service_account.Credentials.from_service_account_file(
                key_path, scopes=SCOPES
            )
        credentials, _ = google_auth_default(scopes=SCOPES)
        return credentials

    def _get_client(self) -> firestore.AsyncClient:
        # Created on first write so a missing credential only fails that attempt
        if self._client is None:
            self._client = firestore.AsyncClient(
                project=settings.firestore_project_id,
                credentials=self._build_credentials(),
                database=settings.firestore_database,
            )
        return self._client

    async def close(self) -> None:
        if self._client is None:
            return
        # close() is synchronous in some client releases
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
        self._client = None
        self.logger.debug("firestore.client_closed")

    async def write(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        client = self._get_client()
        _, document = await client.collection(self.collection).add(payload)

        self.logger.info(
            "firestore.document_added",
            collection=self.collection,
            document_id=document.id,
        )
        return None
