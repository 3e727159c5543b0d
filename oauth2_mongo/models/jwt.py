"""
Support for the JWT bearer grant: client public keys, and the JTIs of
assertions already presented (to detect replays).
"""
from typing import Optional
from dataclasses import dataclass

from pymonad.maybe import Just, Maybe, Nothing
from pymonad.tools import monad_from_none_or_value

from oauth2_mongo.db.mongodb import DbCollection

from .common import to_bson_datetime


@dataclass(frozen=True)
class ClientKey:
    """The public key a client signs its assertions for `subject` with."""
    client_id: str
    subject: str
    public_key: str


@dataclass(frozen=True)
class Jti:
    """A used JSON Token Identifier, with the claims it was presented with."""
    client_id: str
    subject: str
    audience: str
    expires: Optional[int]
    jti: str

    def as_record(self) -> dict:
        """The JTI's details, in the shape the OAuth2 runtime expects."""
        return {
            "issuer": self.client_id,
            "subject": self.subject,
            "audience": self.audience,
            "expires": self.expires,
            "jti": self.jti
        }


def client_key(coll: DbCollection, client_id: str, subject: str) -> Maybe:
    """Retrieve the public key for the `client_id` and `subject` pair."""
    return monad_from_none_or_value(
        Nothing, Just,
        coll.find_one({"client_id": client_id, "subject": subject})).then(
            lambda document: ClientKey(
                client_id, subject, document["public_key"]))


def save_client_key(coll: DbCollection, key: ClientKey) -> None:
    """Insert a client's public key."""
    coll.insert_one({
        "client_id": key.client_id,
        "subject": key.subject,
        "public_key": key.public_key
    })


def __jti_document__(jti: Jti) -> dict:
    return {
        "client_id": jti.client_id,
        "subject": jti.subject,
        "audience": jti.audience,
        "expires": to_bson_datetime(jti.expires),
        "jti": jti.jti
    }


def find_jti(coll: DbCollection, jti: Jti) -> Maybe:
    """Look for a record matching every field of `jti`."""
    return monad_from_none_or_value(
        Nothing, Just, coll.find_one(__jti_document__(jti))).then(
            lambda _document: jti)


def save_jti(coll: DbCollection, jti: Jti) -> None:
    """Record a used JTI."""
    coll.insert_one(__jti_document__(jti))
