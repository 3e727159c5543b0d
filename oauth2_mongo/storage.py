"""
MongoDB storage for all OAuth2 storage types.

`MongoDBStorage` provides the storage operations an OAuth2 runtime expects for
the authorization code, access token, client credentials, user credentials,
refresh token and JWT bearer grants.

Internally, every lookup gives a `pymonad.maybe.Maybe`; only the public methods
here turn a `Nothing` into the "not found" value each storage contract expects:

* `None`: authorization codes, access tokens, refresh tokens and JTIs,
* `False`: client details, user details, client keys and all the `check_*`/
  `is_*` predicates,
* `""`: client scope.

No errors are raised for "not found"; errors from the database driver
propagate unchanged.
"""
from typing import Any, Callable, Mapping, Optional, Union

from pymonad.maybe import Maybe

from oauth2_mongo.debug import getLogger
from oauth2_mongo.config import StorageConfig
from oauth2_mongo.credentials import encrypt_credentials
from oauth2_mongo.db.mongodb import DbDatabase, DbCollection, collection

from oauth2_mongo.models.common import SpacedValue, from_list_field
from oauth2_mongo.models.user import User, save_user, user_by_username
from oauth2_mongo.models.jwt import (
    Jti, ClientKey, find_jti, save_jti, client_key, save_client_key)
from oauth2_mongo.models.access_token import (
    AccessToken, load_access_token, save_access_token)
from oauth2_mongo.models.client import (
    client as fetch_client, make_client, save_client)
from oauth2_mongo.models.refresh_token import (
    RefreshToken,
    save_refresh_token,
    load_refresh_token,
    delete_refresh_token)
from oauth2_mongo.models.authorization_code import (
    AuthorizationCode,
    save_authorization_code,
    load_authorization_code,
    delete_authorization_code)


def __as_record__(entity) -> dict:
    return entity.as_record()


class MongoDBStorage:# pylint: disable=[too-many-public-methods]
    """Simple MongoDB storage for all storage types."""

    def __init__(
            self,
            database: DbDatabase,
            config: Union[StorageConfig, Mapping[str, str], None] = None
    ):
        """
        Initialise the storage.

        PARAMS:
        * database: A `pymongo.database.Database` object.
        * config: A `StorageConfig`, or a mapping overriding some of the
          default collection names, e.g. `{"client_table": "clients"}`.
        """
        self._database = database
        self._config = (
            config if isinstance(config, StorageConfig)
            else StorageConfig.from_mapping(config))

    @property
    def config(self) -> StorageConfig:
        """The storage's (immutable) configuration."""
        return self._config

    def _collection(self, key: str) -> DbCollection:
        return collection(self._database, self._config, key)

    def _result(
            self,
            operation: str,
            result: Maybe,
            not_found: Any,
            found: Callable = __as_record__
    ) -> Any:
        """Convert `result` into what `operation` returns to its caller."""
        getLogger(__name__).debug(
            "%s: %s", operation, "found" if result.is_just() else "not found")
        return result.maybe(not_found, found)

    ##### Authorization codes #####

    def get_authorization_code(self, code: str) -> Optional[dict]:
        """
        Fetch the stored data for an authorization code.

        Returns a dict with the keys 'client_id', 'user_id', 'expires' (Unix
        timestamp), 'redirect_uri' and 'scope' (space-separated), or `None` if
        the code does not exist.
        """
        return self._result(
            "get_authorization_code",
            load_authorization_code(self._collection("code_table"), code),
            None)

    def set_authorization_code(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
            self,
            code: str,
            client_id: str,
            user_id: Optional[str],
            redirect_uri: Optional[str],
            expires: Optional[int],
            scope: Optional[str] = None
    ) -> None:
        """Store a new authorization code. `expires` is a Unix timestamp."""
        getLogger(__name__).debug(
            "Saving authorization code for client '%s'.", client_id)
        save_authorization_code(
            self._collection("code_table"),
            AuthorizationCode(
                code, client_id, user_id, redirect_uri, expires, scope))

    def expire_authorization_code(self, code: str) -> None:
        """Delete a used authorization code: it MUST NOT be used again."""
        delete_authorization_code(self._collection("code_table"), code)

    ##### Access tokens #####

    def get_access_token(self, token: str) -> Optional[dict]:
        """
        Look up an access token.

        Returns a dict with the keys 'expires', 'client_id', 'user_id' and
        'scope', or `None` if the token does not exist.
        """
        return self._result(
            "get_access_token",
            load_access_token(self._collection("access_token_table"), token),
            None)

    def set_access_token(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
            self,
            token: str,
            client_id: str,
            user_id: Optional[str],
            expires: Optional[int],
            scope: Optional[str] = None
    ) -> None:
        """Store a new access token."""
        getLogger(__name__).debug(
            "Saving access token for client '%s'.", client_id)
        save_access_token(
            self._collection("access_token_table"),
            AccessToken(token, client_id, user_id, expires, scope))

    ##### Clients #####

    def get_client_details(self, client_id: str) -> Union[dict, bool]:
        """
        Get the details of the client with ID `client_id`.

        Returns a dict with the keys 'redirect_uri' (space-separated),
        'client_id', 'grant_types' (list), 'user_id' and 'scope', or `False` if
        the client does not exist.
        """
        return self._result(
            "get_client_details",
            fetch_client(self._collection("client_table"), client_id),
            False)

    def set_client_details(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
            self,
            client_id: str,
            client_secret: Optional[str] = None,
            redirect_uri: SpacedValue = None,
            grant_types: SpacedValue = None,
            scope: SpacedValue = None,
            user_id: Optional[str] = None
    ) -> None:
        """
        Register a new client.

        The secret is stored hashed; a client registered without a secret is a
        public client.
        """
        getLogger(__name__).debug("Registering client '%s'.", client_id)
        save_client(
            self._collection("client_table"),
            make_client(
                client_id,
                (encrypt_credentials(client_id, client_secret)
                 if bool(client_secret) else None),
                redirect_uri,
                grant_types,
                scope,
                user_id))

    def get_client_scope(self, client_id: str) -> str:
        """Get the space-separated scope of the client, or an empty string."""
        return self._result(
            "get_client_scope",
            fetch_client(self._collection("client_table"), client_id),
            "",
            lambda _client: _client.scope or "")

    def check_restricted_grant_type(
            self, client_id: str, grant_type: str) -> bool:
        """Check whether the client may use the grant type `grant_type`."""
        return self._result(
            "check_restricted_grant_type",
            fetch_client(self._collection("client_table"), client_id),
            False,
            lambda _client: _client.check_grant_type(grant_type))

    def check_client_credentials(
            self, client_id: str, client_secret: Optional[str] = None
    ) -> bool:
        """
        Check the client's credentials.

        An unknown client and a wrong secret both give `False`.
        """
        return self._result(
            "check_client_credentials",
            fetch_client(self._collection("client_table"), client_id),
            False,
            lambda _client: _client.check_client_secret(client_secret))

    def is_public_client(self, client_id: str) -> bool:
        """
        Check whether the client is a "public" client, i.e. one with no
        secret. An unknown client is not a public client.
        """
        return self._result(
            "is_public_client",
            fetch_client(self._collection("client_table"), client_id),
            False,
            lambda _client: _client.is_public())

    ##### Users #####

    def check_user_credentials(self, username: str, password: str) -> bool:
        """
        Check the user's credentials.

        An unknown user and a wrong password both give `False`.
        """
        return self._result(
            "check_user_credentials",
            user_by_username(self._collection("user_table"), username),
            False,
            lambda _user: _user.check_password(password))

    def get_user_details(self, username: str) -> Union[dict, bool]:
        """
        Get the details for the user.

        Returns a dict with the keys 'user_id' and 'scope', or `False` if the
        user does not exist.
        """
        return self._result(
            "get_user_details",
            user_by_username(self._collection("user_table"), username),
            False)

    def set_user(
            self, username: str, password: str, scope: SpacedValue = None
    ) -> None:
        """Register a new user. The password is stored hashed."""
        getLogger(__name__).debug("Registering user '%s'.", username)
        save_user(
            self._collection("user_table"),
            User(username,
                 encrypt_credentials(username, password),
                 from_list_field(scope)))

    ##### Refresh tokens #####

    def get_refresh_token(self, token: str) -> Optional[dict]:
        """
        Fetch the stored data for a refresh token.

        Returns a dict with the keys 'refresh_token', 'client_id', 'user_id',
        'expires' and 'scope', or `None` if the token does not exist.
        """
        return self._result(
            "get_refresh_token",
            load_refresh_token(self._collection("refresh_token_table"), token),
            None)

    def set_refresh_token(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
            self,
            token: str,
            client_id: str,
            user_id: Optional[str],
            expires: Optional[int],
            scope: Optional[str] = None
    ) -> None:
        """Store a new refresh token."""
        getLogger(__name__).debug(
            "Saving refresh token for client '%s'.", client_id)
        save_refresh_token(
            self._collection("refresh_token_table"),
            RefreshToken(token, client_id, user_id, expires, scope))

    def unset_refresh_token(self, token: str) -> None:
        """
        Delete a used refresh token.

        After a new refresh token is granted, the old one is no longer useful
        and must not be usable again.
        """
        delete_refresh_token(self._collection("refresh_token_table"), token)

    ##### JWT bearer grant #####

    def get_client_key(self, client_id: str, subject: str) -> Union[str, bool]:
        """Get the client's public key for `subject`, or `False`."""
        return self._result(
            "get_client_key",
            client_key(self._collection("jwt_table"), client_id, subject),
            False,
            lambda key: key.public_key)

    def set_client_key(
            self, client_id: str, subject: str, public_key: str) -> None:
        """Store the client's public key for `subject`."""
        getLogger(__name__).debug(
            "Saving public key for client '%s' and subject '%s'.",
            client_id,
            subject)
        save_client_key(
            self._collection("jwt_table"),
            ClientKey(client_id, subject, public_key))

    def get_jti(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
            self,
            client_id: str,
            subject: str,
            audience: str,
            expires: Optional[int],
            jti: str
    ) -> Optional[dict]:
        """
        Find a used JTI matching all of the given claims.

        Returns a dict with the keys 'issuer', 'subject', 'audience', 'expires'
        and 'jti', or `None` if the JTI has not been used.
        """
        return self._result(
            "get_jti",
            find_jti(
                self._collection("jti_table"),
                Jti(client_id, subject, audience, expires, jti)),
            None)

    def set_jti(# pylint: disable=[too-many-arguments, too-many-positional-arguments]
            self,
            client_id: str,
            subject: str,
            audience: str,
            expires: Optional[int],
            jti: str
    ) -> None:
        """Store a used JTI, so that replays of the assertion are detected."""
        save_jti(
            self._collection("jti_table"),
            Jti(client_id, subject, audience, expires, jti))
