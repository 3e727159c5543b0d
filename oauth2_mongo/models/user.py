"""Model and persistence functions for resource owners (users)."""
from typing import Optional
from dataclasses import dataclass

from pymonad.maybe import Just, Maybe, Nothing
from pymonad.tools import monad_from_none_or_value

from oauth2_mongo.db.mongodb import DbCollection
from oauth2_mongo.debug import getLogger, redact
from oauth2_mongo.credentials import verify_credentials

from .common import to_list_field, from_list_field


@dataclass(frozen=True)
class User:
    """Class representing a user; `password` holds the password's hash."""
    username: str
    password: Optional[str]
    scope: Optional[str] = None

    def check_password(self, password: Optional[str]) -> bool:
        """Check `password` against the stored hash."""
        return verify_credentials(self.username, password, self.password)

    def as_record(self) -> dict:
        """The user's details, in the shape the OAuth2 runtime expects."""
        return {"user_id": self.username, "scope": self.scope}


def user_by_username(coll: DbCollection, username: str) -> Maybe:
    """Retrieve a user by the username."""
    return monad_from_none_or_value(
        Nothing, Just, coll.find_one({"_id": username})).then(
            lambda document: User(
                username=username,
                password=document.get("password"),
                scope=from_list_field(document.get("scope"))))


def save_user(coll: DbCollection, user: User) -> User:
    """Insert a new user."""
    document = {
        "_id": user.username,
        "password": user.password,
        "scope": to_list_field(user.scope)
    }
    getLogger(__name__).debug("Inserting user: %s", redact(document))
    coll.insert_one(document)
    return user
