"""Wire the storage into a Flask application."""
import traceback
from typing import Mapping, Optional

from flask import Flask, jsonify, current_app
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from oauth2_mongo.debug import __pk__
from oauth2_mongo.errors import OAuth2StorageError, ConfigurationError
from oauth2_mongo.storage import MongoDBStorage
from oauth2_mongo.db.mongodb import DbDatabase


def storage_from_config(
        config: Mapping, database: Optional[DbDatabase] = None
) -> MongoDBStorage:
    """
    Build the storage from a settings mapping (e.g. `app.config`).

    When no `database` is given, one is opened using the `MONGO_URI` and
    `MONGO_DATABASE` settings.
    """
    if database is None:
        if not bool(config.get("MONGO_DATABASE")):
            raise ConfigurationError("No `MONGO_DATABASE` setting was found.")
        database = MongoClient(config["MONGO_URI"]).get_database(
            config["MONGO_DATABASE"])

    return MongoDBStorage(
        database,
        __pk__("OAuth2 storage collection overrides",
               config.get("OAUTH2_STORAGE_COLLECTIONS") or {}))


def handle_storage_error(exc: OAuth2StorageError):
    """Handle OAuth2StorageError if not handled anywhere else."""
    current_app.logger.error("Storage error occurred!", exc_info=True)
    return jsonify({
        "error": type(exc).__name__,
        "error_description": " :: ".join(str(arg) for arg in exc.args),
        "error-trace": "".join(traceback.format_exception(exc))
    }), exc.error_code


def handle_database_error(exc: PyMongoError):
    """Handle errors from the database driver."""
    current_app.logger.error("Database error occurred!", exc_info=True)
    return jsonify({
        "error": type(exc).__name__,
        "error_description": (
            "The OAuth2 storage could not complete the request: "
            f"{' '.join(str(arg) for arg in exc.args)}")
    }), 500


__error_handlers__ = {
    OAuth2StorageError: handle_storage_error,
    PyMongoError: handle_database_error
}
def register_error_handlers(app: Flask):
    """Register ALL defined error handlers"""
    for class_, error_handler in __error_handlers__.items():
        app.register_error_handler(class_, error_handler)


def setup_oauth2_storage(
        app: Flask, database: Optional[DbDatabase] = None
) -> MongoDBStorage:
    """Set up the OAuth2 storage for the flask application."""
    storage = storage_from_config(app.config, database)
    app.config["OAUTH2_STORAGE"] = storage
    register_error_handlers(app)
    app.logger.debug(
        "OAuth2 storage collections: %s", dict(storage.config.collections))
    return storage
