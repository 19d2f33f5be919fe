"""MongoDB connection service for managing the client lifecycle and health checks."""

from collections.abc import Callable
from typing import Any

from loguru import logger
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.book_catalog.core.errors import StoreUnavailableError
from src.book_catalog.runtime.config.config_data import MongoConfig
from src.book_catalog.runtime.context import get_config


class DocumentStoreService:
    """Owns the single MongoDB client shared by every request.

    The service is constructed once at startup, connected with
    :meth:`connect` and handed to request handlers through FastAPI
    dependencies. Collections are resolved per call; the client handles
    concurrent use from the event loop.
    """

    def __init__(
        self,
        config: MongoConfig | None = None,
        client_factory: Callable[..., AsyncMongoClient] = AsyncMongoClient,
    ):
        self._config = config or get_config().mongo
        self._client_factory = client_factory
        self._client: AsyncMongoClient | None = None

    async def connect(self) -> None:
        """Create the client and verify the server answers ``ping``.

        Raises:
            StoreUnavailableError: If the server cannot be reached. The
                half-open client is closed before raising.
        """
        logger.info(
            "Connecting to MongoDB at {} (database '{}')",
            self._config.sanitized_url,
            self._config.database,
        )
        client = self._client_factory(self._config.url, **self._config.client_options())
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error(
                "MongoDB is unreachable",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            await client.close()
            raise StoreUnavailableError(
                f"Could not connect to MongoDB at {self._config.sanitized_url}"
            ) from e

        self._client = client
        logger.info("MongoDB connection established")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def config(self) -> MongoConfig:
        return self._config

    def get_database(self) -> AsyncDatabase:
        if self._client is None:
            raise RuntimeError("DocumentStoreService.connect() has not been awaited")
        return self._client[self._config.database]

    def get_collection(self, name: str) -> AsyncCollection:
        return self.get_database()[name]

    def documents_collection(self) -> AsyncCollection:
        return self.get_collection(self._config.documents_collection)

    def books_collection(self) -> AsyncCollection:
        return self.get_collection(self._config.books_collection)

    async def health_check(self) -> bool:
        """Ping the server.

        Returns:
            True if MongoDB is reachable, False otherwise.
        """
        if self._client is None:
            logger.warning("MongoDB client not initialized, health check failed")
            return False

        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(
                "MongoDB health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def describe(self) -> dict[str, Any]:
        """Connection details safe to expose in readiness output."""
        return {
            "url": self._config.sanitized_url,
            "database": self._config.database,
        }

    async def close(self) -> None:
        """Close the MongoDB client and release its connections."""
        if self._client is None:
            return
        logger.info("Closing MongoDB connection")
        try:
            await self._client.close()
        finally:
            self._client = None
