"""Model and persistence functions for authorization codes."""
from typing import Optional
from dataclasses import dataclass

from pymonad.maybe import Just, Maybe, Nothing
from pymonad.tools import monad_from_none_or_value

from oauth2_mongo.db.mongodb import DbCollection

from .common import (
    to_list_field, from_list_field, to_bson_datetime, from_bson_datetime)


@dataclass(frozen=True)
class AuthorizationCode:
    """Class representing an authorization code."""
    code: str
    client_id: str
    user_id: Optional[str]
    redirect_uri: Optional[str]
    expires: Optional[int]
    scope: Optional[str] = None

    def as_record(self) -> dict:
        """The code's details, in the shape the OAuth2 runtime expects."""
        return {
            "client_id": self.client_id,
            "user_id": self.user_id,
            "expires": self.expires,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope
        }


def code_to_document(code: AuthorizationCode) -> dict:
    """Map an `AuthorizationCode` to its stored document."""
    return {
        "_id": code.code,
        "client_id": code.client_id,
        "user_id": code.user_id,
        "redirect_uri": code.redirect_uri,
        "expires": to_bson_datetime(code.expires),
        "scope": to_list_field(code.scope)
    }


def document_to_code(code: str, document: dict) -> AuthorizationCode:
    """Map a stored document back into an `AuthorizationCode`."""
    return AuthorizationCode(
        code=code,
        client_id=document["client_id"],
        user_id=document.get("user_id"),
        redirect_uri=document.get("redirect_uri"),
        expires=from_bson_datetime(document.get("expires")),
        scope=from_list_field(document.get("scope")))


def load_authorization_code(coll: DbCollection, code: str) -> Maybe:
    """Load an authorization code by its code string."""
    return monad_from_none_or_value(
        Nothing, Just, coll.find_one({"_id": code})).then(
            lambda document: document_to_code(code, document))


def save_authorization_code(
        coll: DbCollection, code: AuthorizationCode) -> None:
    """Insert a new authorization code."""
    coll.insert_one(code_to_document(code))


def delete_authorization_code(coll: DbCollection, code: str) -> None:
    """Delete an authorization code. Deleting an absent code does nothing."""
    coll.delete_one({"_id": code})
