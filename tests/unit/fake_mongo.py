"""
An in-memory stand-in for a `pymongo` database: just enough of it for
read-after-write tests of the storage.
"""
import copy

from bson.datetime_ms import DatetimeMS
from pymongo.errors import DuplicateKeyError


def __bson__(value):
    """Mimic a BSON round trip: datetimes come back as naive UTC datetimes."""
    if isinstance(value, DatetimeMS):
        return value.as_datetime()
    return copy.deepcopy(value)


def __matches__(document: dict, query: dict) -> bool:
    return all(
        key in document and document[key] == __bson__(value)
        for key, value in query.items())


class FakeCollection:
    """A collection holding its documents in a list."""

    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict] = []

    def find_one(self, query: dict):
        """Return a copy of the first document matching `query`, or None."""
        for document in self.documents:
            if __matches__(document, query):
                return copy.deepcopy(document)
        return None

    def insert_one(self, document: dict):
        """Insert `document`, refusing a duplicate `_id`."""
        if "_id" in document and self.find_one({"_id": document["_id"]}):
            raise DuplicateKeyError(
                f"E11000 duplicate key error collection: {self.name}", 11000)
        self.documents.append(
            {key: __bson__(value) for key, value in document.items()})

    def delete_one(self, query: dict):
        """Delete the first document matching `query`, if any."""
        for idx, document in enumerate(self.documents):
            if __matches__(document, query):
                del self.documents[idx]
                return


class FakeDatabase:
    """A database creating collections on first use."""

    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        """Select a collection by name."""
        return self.collections.setdefault(name, FakeCollection(name))
