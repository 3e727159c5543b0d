"""Logging and debug helpers for the storage adapter."""
import logging
from typing import Any
from flask import current_app

__this_module_name__ = __name__

# Document fields that must never end up in the logs.
__SECRET_FIELDS__ = ("client_secret", "password", "public_key")


# pylint: disable=invalid-name
def getLogger(name: str):
    """
    Return the Flask application's logger when running inside an application
    context, otherwise the standard library logger called `name`.
    """
    return (
        logging.getLogger(name)
        if not bool(current_app)
        else current_app.logger)


def redact(document: dict) -> dict:
    """Copy `document`, masking any credential fields, for logging."""
    return {
        key: ("********" if key in __SECRET_FIELDS__ and bool(value) else value)
        for key, value in document.items()
    }


def __pk__(*args) -> Any:
    """Log the last argument at DEBUG level, titled by the others; return it."""
    value = args[-1]
    title_vals = " => ".join(args[0:-1])
    getLogger(__this_module_name__).debug("%s: %s", title_vals, value)
    return value
