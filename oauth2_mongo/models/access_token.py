"""Model and persistence functions for access tokens."""
from typing import Optional
from dataclasses import dataclass

from pymonad.maybe import Just, Maybe, Nothing
from pymonad.tools import monad_from_none_or_value

from oauth2_mongo.db.mongodb import DbCollection

from .common import (
    to_list_field, from_list_field, to_bson_datetime, from_bson_datetime)


@dataclass(frozen=True)
class AccessToken:
    """Class representing a stored access token."""
    token: str
    client_id: str
    user_id: Optional[str]
    expires: Optional[int]
    scope: Optional[str] = None

    def as_record(self) -> dict:
        """The token's details, in the shape the OAuth2 runtime expects."""
        return {
            "expires": self.expires,
            "client_id": self.client_id,
            "user_id": self.user_id,
            "scope": self.scope
        }


def token_to_document(token: AccessToken) -> dict:
    """Map an `AccessToken` to its stored document."""
    return {
        "_id": token.token,
        "client_id": token.client_id,
        "user_id": token.user_id,
        "expires": to_bson_datetime(token.expires),
        "scope": to_list_field(token.scope)
    }


def document_to_token(token: str, document: dict) -> AccessToken:
    """Map a stored document back into an `AccessToken`."""
    return AccessToken(
        token=token,
        client_id=document["client_id"],
        user_id=document.get("user_id"),
        expires=from_bson_datetime(document.get("expires")),
        scope=from_list_field(document.get("scope")))


def load_access_token(coll: DbCollection, token: str) -> Maybe:
    """Load an access token by its token string."""
    return monad_from_none_or_value(
        Nothing, Just, coll.find_one({"_id": token})).then(
            lambda document: document_to_token(token, document))


def save_access_token(coll: DbCollection, token: AccessToken) -> None:
    """Insert a new access token."""
    coll.insert_one(token_to_document(token))
