"""MongoDB connection management for Mindify.

This module provides the MongoDB connection manager. A single instance is
created at application startup, handed to request handlers through
dependencies, and closed at shutdown.
"""

import asyncio
from typing import Any, List, Optional, Tuple

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import errors

from mindify.utils.exceptions import DatabaseError
from mindify.utils.logger import get_database_logger

logger = get_database_logger()

DEFAULT_DATABASE_NAME = "mindify"


class MongoDB:
    """MongoDB connection manager."""

    def __init__(
        self,
        url: str,
        db_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Create an unconnected manager.

        Args:
            url: MongoDB connection URL
            db_name: Database name, defaults to the one named in the URL
            **kwargs: Additional connection parameters
        """
        self.url = url
        self.db_name = db_name
        self.options = kwargs
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def connect(self) -> None:
        """Connect to MongoDB with connection pooling."""
        async with self._lock:
            if self._client is not None:
                logger.warning("MongoDB already connected")
                return

            connection_params = {
                "maxPoolSize": self.options.get("max_pool_size", 50),
                "minPoolSize": self.options.get("min_pool_size", 0),
                "connectTimeoutMS": self.options.get("connect_timeout_ms", 10000),
                "serverSelectionTimeoutMS": self.options.get("server_selection_timeout_ms", 5000),
                "tz_aware": True,
            }

            try:
                client = AsyncIOMotorClient(self.url, **connection_params)
                if self.db_name:
                    database = client[self.db_name]
                else:
                    database = client.get_default_database(default=DEFAULT_DATABASE_NAME)

                # Test connection
                await client.admin.command("ping")
            except errors.PyMongoError as e:
                logger.error(f"MongoDB connection failed: {str(e)}", exc_info=True)
                raise DatabaseError(
                    "Could not connect to MongoDB",
                    operation="connect",
                    cause=e,
                )

            self._client = client
            self._database = database
            logger.info(
                "MongoDB connected successfully",
                extra={
                    "database": database.name,
                    "pool_size": connection_params["maxPoolSize"],
                }
            )

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        async with self._lock:
            if self._client is None:
                return
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB disconnected successfully")

    async def ping(self) -> bool:
        """Check if MongoDB connection is alive.

        Returns:
            bool: True if connection is alive
        """
        if self._client is None:
            return False

        try:
            await self._client.admin.command("ping")
            return True
        except errors.PyMongoError as e:
            logger.error(f"MongoDB ping failed: {str(e)}")
            return False

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """Get the connected database.

        Raises:
            DatabaseError: If connect() has not been awaited
        """
        if self._database is None:
            raise DatabaseError("MongoDB not connected", operation="get_database")
        return self._database

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection by name.

        Args:
            name: Collection name

        Returns:
            Collection instance
        """
        return self.database[name]

    async def create_index(
        self,
        collection_name: str,
        keys: List[Tuple[str, int]],
        **kwargs: Any,
    ) -> bool:
        """Create an index on a collection.

        Args:
            collection_name: Name of the collection
            keys: List of (field, direction) tuples
            **kwargs: Additional index options

        Returns:
            bool: True if index was created
        """
        collection = self.get_collection(collection_name)

        try:
            index_name = await collection.create_index(keys, **kwargs)
            logger.info(
                f"Created index {index_name} on {collection_name}",
                extra={"keys": keys, "options": kwargs}
            )
            return True
        except errors.PyMongoError as e:
            logger.error(
                f"Failed to create index on {collection_name}: {str(e)}",
                extra={"keys": keys, "options": kwargs}
            )
            return False


__all__ = ["MongoDB", "DEFAULT_DATABASE_NAME"]
