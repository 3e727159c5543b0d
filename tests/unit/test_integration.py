"""Test setting up the storage in a flask application."""
import pytest
from flask import Flask
from pymongo.errors import ServerSelectionTimeoutError

from oauth2_mongo import settings
from oauth2_mongo.storage import MongoDBStorage
from oauth2_mongo.errors import ConfigurationError
from oauth2_mongo.integration import storage_from_config


@pytest.mark.unit_test
def test_storage_is_set_up(fxtr_app, fxtr_fake_database):
    """
    GIVEN: an application configured with a collection override
    WHEN: the storage is set up
    THEN: verify the storage is available from the application's config and
          uses the overriding collection
    """
    storage = fxtr_app.config["OAUTH2_STORAGE"]
    assert isinstance(storage, MongoDBStorage)
    assert storage.config.collection_name("client_table") == "test_clients"

    storage.set_client_details("cid", "secret", "/cb")
    assert fxtr_fake_database.get_collection("test_clients").find_one(
        {"_id": "cid"}) is not None


@pytest.mark.unit_test
def test_storage_from_config_opens_database(mocker):
    """
    GIVEN: settings with a MongoDB URI and database name
    WHEN: the storage is built without a database
    THEN: verify a client is created for the URI and the named database used
    """
    mock_client = mocker.patch("oauth2_mongo.integration.MongoClient")
    storage_from_config({
        "MONGO_URI": "mongodb://db.example:27017",
        "MONGO_DATABASE": "authdb"
    })
    mock_client.assert_called_once_with("mongodb://db.example:27017")
    mock_client.return_value.get_database.assert_called_once_with("authdb")


@pytest.mark.unit_test
def test_storage_from_config_requires_database_name():
    """
    GIVEN: settings without a database name
    WHEN: the storage is built without a database
    THEN: verify a `ConfigurationError` is raised
    """
    with pytest.raises(ConfigurationError):
        storage_from_config({"MONGO_URI": settings.MONGO_URI})


def __app_with_failing_route__(fxtr_app: Flask, exc: Exception) -> Flask:
    def __fail__():
        raise exc

    fxtr_app.add_url_rule("/fail", "fail", __fail__)
    return fxtr_app


@pytest.mark.unit_test
def test_storage_errors_are_handled(fxtr_app):
    """
    GIVEN: a route raising a storage error
    WHEN: the route is requested
    THEN: verify a JSON error response with the error's code is returned
    """
    app = __app_with_failing_route__(
        fxtr_app, ConfigurationError("Unknown collection key(s): x."))
    response = app.test_client().get("/fail")
    assert response.status_code == 500
    assert response.json["error"] == "ConfigurationError"
    assert response.json["error_description"] == "Unknown collection key(s): x."


@pytest.mark.unit_test
def test_database_errors_are_handled(fxtr_app):
    """
    GIVEN: a route raising a database driver error
    WHEN: the route is requested
    THEN: verify a JSON error response is returned
    """
    app = __app_with_failing_route__(
        fxtr_app, ServerSelectionTimeoutError("No servers found"))
    response = app.test_client().get("/fail")
    assert response.status_code == 500
    assert response.json["error"] == "ServerSelectionTimeoutError"
    assert "No servers found" in response.json["error_description"]
