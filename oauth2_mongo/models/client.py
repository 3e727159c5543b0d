"""Model and persistence functions for OAuth2 clients."""
from typing import Optional
from dataclasses import dataclass

from pymonad.maybe import Just, Maybe, Nothing
from pymonad.tools import monad_from_none_or_value

from oauth2_mongo.db.mongodb import DbCollection
from oauth2_mongo.debug import getLogger, redact
from oauth2_mongo.credentials import verify_credentials

from .common import SpacedValue, to_list_field, from_list_field


@dataclass(frozen=True)
class OAuth2Client:# pylint: disable=[too-many-instance-attributes]
    """
    Client to the OAuth2 Server.

    `client_secret` holds the hash of the secret, never the secret itself. A
    client without a secret is a public client.
    """
    client_id: str
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    grant_types: Optional[tuple[str, ...]] = None
    user_id: Optional[str] = None
    scope: Optional[str] = None

    def is_public(self) -> bool:
        """Check whether the client is a public client."""
        return not bool(self.client_secret)

    def check_grant_type(self, grant_type: str) -> bool:
        """Check whether the client may use the grant type `grant_type`."""
        return grant_type in (self.grant_types or tuple())

    def check_client_secret(self, client_secret: Optional[str]) -> bool:
        """Check whether `client_secret` is this client's secret."""
        return verify_credentials(
            self.client_id, client_secret, self.client_secret)

    def as_record(self) -> dict:
        """The client's details, in the shape the OAuth2 runtime expects."""
        return {
            "redirect_uri": self.redirect_uri,
            "client_id": self.client_id,
            "grant_types": (
                None if self.grant_types is None else list(self.grant_types)),
            "user_id": self.user_id,
            "scope": self.scope
        }


def __grant_types__(value) -> Optional[tuple[str, ...]]:
    return None if value is None else tuple(to_list_field(value))


def client_to_document(client: OAuth2Client) -> dict:
    """Map an `OAuth2Client` to its stored document."""
    return {
        "_id": client.client_id,
        "client_secret": client.client_secret or None,
        "redirect_uri": to_list_field(client.redirect_uri),
        "grant_types": to_list_field(client.grant_types),
        "user_id": client.user_id,
        "scope": to_list_field(client.scope)
    }


def document_to_client(client_id: str, document: dict) -> OAuth2Client:
    """Map a stored document back into an `OAuth2Client`."""
    return OAuth2Client(
        client_id=client_id,
        client_secret=document.get("client_secret"),
        redirect_uri=from_list_field(document.get("redirect_uri")),
        grant_types=__grant_types__(document.get("grant_types")),
        user_id=document.get("user_id"),
        scope=from_list_field(document.get("scope")))


def make_client(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
        client_id: str,
        hashed_secret: Optional[str] = None,
        redirect_uri: SpacedValue = None,
        grant_types: SpacedValue = None,
        scope: SpacedValue = None,
        user_id: Optional[str] = None
) -> OAuth2Client:
    """
    Build an `OAuth2Client` from values that may be given either as
    space-separated strings or as sequences of strings.
    """
    return OAuth2Client(
        client_id=client_id,
        client_secret=hashed_secret or None,
        redirect_uri=from_list_field(redirect_uri),
        grant_types=__grant_types__(grant_types),
        user_id=user_id,
        scope=from_list_field(scope))


def client(coll: DbCollection, client_id: str) -> Maybe:
    """Retrieve a client by its ID"""
    return monad_from_none_or_value(
        Nothing, Just, coll.find_one({"_id": client_id})).then(
            lambda document: document_to_client(client_id, document))


def save_client(coll: DbCollection, the_client: OAuth2Client) -> OAuth2Client:
    """Insert a new client."""
    document = client_to_document(the_client)
    getLogger(__name__).debug("Inserting client: %s", redact(document))
    coll.insert_one(document)
    return the_client
