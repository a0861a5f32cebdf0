"""MongoDB submission backend."""

from typing import Any

from pymongo import AsyncMongoClient

from deployment_wizard.backends.base import DeploymentBackend
from deployment_wizard.config import settings
from deployment_wizard.core.exceptions import BackendConfigurationError
from deployment_wizard.models.deployment import DeploymentBase


class MongoBackend(DeploymentBackend):
    """Inserts each deployment into a MongoDB collection.

    One client is created lazily and reused for the life of the backend.
    """

    def __init__(
        self,
        client: AsyncMongoClient | None = None,
        uri: str | None = None,
        database: str | None = None,
        collection: str | None = None,
    ):
        super().__init__()
        self._client = client
        self.uri = settings.mongodb_uri if uri is None else uri
        self.database = database or settings.mongodb_database
        self.collection = collection or settings.mongodb_collection

    @property
    def name(self) -> str:
        return "mongodb"

    @property
    def label(self) -> str:
        return "MongoDB"

    def _get_client(self) -> AsyncMongoClient:
        if self._client is None:
            if not self.uri:
                raise BackendConfigurationError(
                    self.name, "MONGODB_URI environment variable is not set"
                )
            self._client = AsyncMongoClient(self.uri)
        return self._client

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        self.logger.debug("mongodb.client_closed")

    async def write(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        collection = self._get_client()[self.database][self.collection]
        # insert_one adds _id to the document it is given
        result = await collection.insert_one(dict(payload))

        self.logger.info(
            "mongodb.document_inserted",
            database=self.database,
            collection=self.collection,
            inserted_id=str(result.inserted_id),
        )
        return None

    def success_message(self, record: DeploymentBase) -> str:
        return f"{super().success_message(record)} (saved to MongoDB)"

    def failure_message(self, exc: Exception) -> str:
        return "Failed to save to MongoDB Atlas. Check your connection string."
