"""Handle connection to the MongoDB database"""
import contextlib
from typing import Any, Iterator, Protocol

from pymongo import MongoClient

from oauth2_mongo.debug import getLogger
from oauth2_mongo.config import StorageConfig


class DbCollection(Protocol):
    """Type annotation for a MongoDB collection: only what the adapter uses."""
    def find_one(self, *args, **kwargs) -> Any:
        """Fetch a single document."""

    def insert_one(self, *args, **kwargs) -> Any:
        """Insert a single document."""

    def delete_one(self, *args, **kwargs) -> Any:
        """Delete a single document."""


class DbDatabase(Protocol):
    """Type annotation for a MongoDB database."""
    def get_collection(self, *args, **kwargs) -> DbCollection:
        """Select a collection by name."""


@contextlib.contextmanager
def connection(mongo_uri: str, **client_options) -> Iterator[MongoClient]:
    """Create the connection to the MongoDB server."""
    logger = getLogger(__name__)
    logger.debug("Opening MongoDB connection.")
    client: MongoClient = MongoClient(mongo_uri, **client_options)
    try:
        yield client
    finally:
        logger.debug("Closing MongoDB connection.")
        client.close()


def collection(
        database: DbDatabase, config: StorageConfig, key: str
) -> DbCollection:
    """Select the collection configured for the entity kind `key`."""
    return database.get_collection(config.collection_name(key))
