"""
Manage the OAuth2 storage from the command line.

Run with `FLASK_APP=scripts/manage_oauth2_storage.py flask <command>`. Point
the `OAUTH2_STORAGE_SETTINGS` environment variable at a settings file to
override the defaults in `oauth2_mongo.settings`.
"""
import os
import sys
import logging
from pathlib import Path
from typing import Callable, Optional

import click
from flask import Flask
from pymongo.errors import DuplicateKeyError

from oauth2_mongo import settings
from oauth2_mongo.db import mongodb
from oauth2_mongo.storage import MongoDBStorage


def dev_loggers(appl: Flask) -> None:
    """Setup the logging handlers."""
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    appl.logger.addHandler(stderr_handler)

    root_logger = logging.getLogger()
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(appl.config["LOGLEVEL"])


def gunicorn_loggers(appl: Flask) -> None:
    """Use gunicorn logging handlers for the application."""
    logger = logging.getLogger("gunicorn.error")
    appl.logger.handlers = logger.handlers
    appl.logger.setLevel(logger.level)


def setup_loggers() -> Callable[[Flask], None]:
    """
    Setup the loggers according to the WSGI server used to run the application.
    """
    software, *_version_and_comments = os.environ.get(
        "SERVER_SOFTWARE", "").split('/')
    return gunicorn_loggers if bool(software) else dev_loggers


def create_app(
        config: Optional[dict] = None,
        setup_logging: Callable[[Flask], None] = dev_loggers
) -> Flask:
    """Create the application hosting the storage CLI commands."""
    appl = Flask(__name__)
    appl.config.from_object(settings)
    appl.config.from_envvar("OAUTH2_STORAGE_SETTINGS", silent=True)
    appl.config.update(config or {})
    setup_logging(appl)
    return appl


app = create_app(setup_logging=setup_loggers())


def __with_storage__(func: Callable[[MongoDBStorage], None]) -> None:
    """Run `func` with a storage object on a fresh connection."""
    with mongodb.connection(app.config["MONGO_URI"]) as client:
        func(MongoDBStorage(
            client.get_database(app.config["MONGO_DATABASE"]),
            app.config["OAUTH2_STORAGE_COLLECTIONS"]))


def __insert__(description: str, func: Callable[[MongoDBStorage], None]):
    try:
        __with_storage__(func)
    except DuplicateKeyError as _dke:
        print(f"{description} already exists.", file=sys.stderr)
        sys.exit(1)
    print(f"{description} registered.")

##### BEGIN: CLI Commands #####

@app.cli.command()
@click.argument("client_id")
@click.option("--secret", default=None,
              help="The client's secret. Omit for a public client.")
@click.option("--redirect-uri", "redirect_uris", multiple=True,
              help="A redirect URI. Can be given more than once.")
@click.option("--grant-type", "grant_types", multiple=True,
              help="An allowed grant type. Can be given more than once.")
@click.option("--scope", "scopes", multiple=True,
              help="An allowed scope. Can be given more than once.")
@click.option("--user-id", default=None,
              help="The user associated with the client.")
def register_client(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
        client_id: str,
        secret: Optional[str],
        redirect_uris: tuple[str, ...],
        grant_types: tuple[str, ...],
        scopes: tuple[str, ...],
        user_id: Optional[str]
):
    """Register the OAuth2 client with ID `client_id`."""
    __insert__(
        f"Client '{client_id}'",
        lambda storage: storage.set_client_details(
            client_id,
            client_secret=secret,
            redirect_uri=redirect_uris,
            grant_types=grant_types,
            scope=scopes,
            user_id=user_id))


@app.cli.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True,
              confirmation_prompt=True)
@click.option("--scope", "scopes", multiple=True,
              help="A scope the user is restricted to. Can be repeated.")
def register_user(username: str, password: str, scopes: tuple[str, ...]):
    """Register the user `username`."""
    __insert__(
        f"User '{username}'",
        lambda storage: storage.set_user(username, password, scopes))


@app.cli.command()
@click.argument("client_id")
@click.argument("subject")
@click.argument("public_key_file",
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
def register_jwt_key(client_id: str, subject: str, public_key_file: Path):
    """Store the public key the client signs JWT assertions with."""
    public_key = public_key_file.read_text(encoding="utf8")
    __insert__(
        f"Key for client '{client_id}' and subject '{subject}'",
        lambda storage: storage.set_client_key(client_id, subject, public_key))

##### END: CLI Commands #####
