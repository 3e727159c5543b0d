"""
Refresh tokens

A refresh token is single-use: once a new refresh token has been issued in its
place, the old one is deleted so it cannot be presented again.
"""
from typing import Optional
from dataclasses import dataclass

from pymonad.maybe import Just, Maybe, Nothing
from pymonad.tools import monad_from_none_or_value

from oauth2_mongo.db.mongodb import DbCollection

from .common import (
    to_list_field, from_list_field, to_bson_datetime, from_bson_datetime)


@dataclass(frozen=True)
class RefreshToken:
    """Class representing a refresh token."""
    token: str
    client_id: str
    user_id: Optional[str]
    expires: Optional[int]
    scope: Optional[str] = None

    def as_record(self) -> dict:
        """The token's details, in the shape the OAuth2 runtime expects."""
        return {
            "refresh_token": self.token,
            "client_id": self.client_id,
            "user_id": self.user_id,
            "expires": self.expires,
            "scope": self.scope
        }


def save_refresh_token(coll: DbCollection, token: RefreshToken) -> None:
    """Save the refresh token into the database."""
    coll.insert_one({
        "_id": token.token,
        "client_id": token.client_id,
        "user_id": token.user_id,
        "expires": to_bson_datetime(token.expires),
        "scope": to_list_field(token.scope)
    })


def load_refresh_token(coll: DbCollection, token: str) -> Maybe:
    """Load a refresh_token by its token string."""
    def __process_results__(document):
        return RefreshToken(
            token=token,
            client_id=document["client_id"],
            user_id=document.get("user_id"),
            expires=from_bson_datetime(document.get("expires")),
            scope=from_list_field(document.get("scope")))

    return monad_from_none_or_value(
        Nothing, Just, coll.find_one({"_id": token})).then(
            __process_results__)


def delete_refresh_token(coll: DbCollection, token: str) -> None:
    """Delete a used refresh token."""
    coll.delete_one({"_id": token})
