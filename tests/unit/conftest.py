"""Fixtures for unit tests."""
import time

import pytest
from flask import Flask

from oauth2_mongo import settings
from oauth2_mongo.storage import MongoDBStorage
from oauth2_mongo.integration import setup_oauth2_storage

from tests.unit.fake_mongo import FakeDatabase


@pytest.fixture(scope="function")
def fxtr_collection(mocker):
    """Fixture: a mocked `pymongo` collection."""
    coll = mocker.MagicMock(name="collection")
    coll.find_one.return_value = None
    return coll


@pytest.fixture(scope="function")
def fxtr_database(mocker, fxtr_collection):# pylint: disable=[redefined-outer-name]
    """Fixture: a mocked `pymongo` database handing out `fxtr_collection`."""
    database = mocker.MagicMock(name="database")
    database.get_collection.return_value = fxtr_collection
    return database


@pytest.fixture(scope="function")
def fxtr_fake_database():
    """Fixture: an in-memory database."""
    return FakeDatabase()


@pytest.fixture(scope="function")
def fxtr_storage(fxtr_fake_database):# pylint: disable=[redefined-outer-name]
    """Fixture: the storage, backed by an in-memory database."""
    return MongoDBStorage(fxtr_fake_database)


@pytest.fixture(scope="function")
def fxtr_expires():
    """Fixture: a Unix timestamp one hour from now."""
    return int(time.time()) + 3600


@pytest.fixture(scope="function")
def fxtr_app(fxtr_fake_database):# pylint: disable=[redefined-outer-name]
    """Fixture: a flask application with the storage set up."""
    app = Flask(__name__)
    app.config.from_object(settings)
    app.config.update({
        "TESTING": True,
        "OAUTH2_STORAGE_COLLECTIONS": {"client_table": "test_clients"}
    })
    setup_oauth2_storage(app, database=fxtr_fake_database)
    return app
