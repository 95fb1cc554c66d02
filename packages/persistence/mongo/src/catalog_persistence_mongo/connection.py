"""Motor client lifecycle for the catalog database."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError, PyMongoError

from .exceptions import MongoConnectionError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

    from catalog_core.config import CatalogConfig


class MongoConnectionManager:
    """
    Lazily created Motor client bound to one database.

    Extra keyword arguments are passed to ``AsyncIOMotorClient`` and
    override the timeout defaults. Usable as an async context manager::

        async with MongoConnectionManager.from_config(config) as conn:
            repo = PartitionedMongoRepository(conn, Product)
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        *,
        database: str = "catalog",
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        **client_options: Any,
    ) -> None:
        self._url = url
        self._database = database
        self._client_options: dict[str, Any] = {
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
            "connectTimeoutMS": connect_timeout_ms,
            **client_options,
        }
        self._client: AsyncIOMotorClient[Any] | None = None

    @classmethod
    def from_config(cls, config: CatalogConfig, **client_options: Any) -> MongoConnectionManager:
        return cls(
            config.mongo_url,
            database=config.database,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
            connect_timeout_ms=config.connect_timeout_ms,
            **client_options,
        )

    @property
    def client_options(self) -> dict[str, Any]:
        return dict(self._client_options)

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> AsyncIOMotorClient[Any]:
        """Create the client on first call and return the same one afterwards.

        Motor connects lazily, so only a malformed URL fails here.
        """
        if self._client is None:
            try:
                self._client = AsyncIOMotorClient(self._url, **self._client_options)
            except ConfigurationError as exc:
                raise MongoConnectionError(f"Invalid MongoDB URL: {exc}") from exc
        return self._client

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._client

    @property
    def database_name(self) -> str:
        return self._database

    @property
    def database(self) -> AsyncIOMotorDatabase[Any]:
        return self.client.get_database(self._database)

    def collection(self, name: str) -> AsyncIOMotorCollection[Any]:
        return self.database.get_collection(name)

    def close(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            client.close()

    async def health_check(self) -> bool:
        """Return whether the server answers ``ping``."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            return False
        return True

    async def __aenter__(self) -> MongoConnectionManager:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
