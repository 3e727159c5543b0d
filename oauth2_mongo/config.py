"""Immutable configuration for the storage adapter."""
from types import MappingProxyType
from dataclasses import dataclass, field
from typing import Mapping, Optional

from oauth2_mongo.errors import ConfigurationError

DEFAULT_COLLECTIONS: Mapping[str, str] = MappingProxyType({
    "code_table": "oauth_authorization_codes",
    "access_token_table": "oauth_access_tokens",
    "client_table": "oauth_clients",
    "user_table": "oauth_users",
    "refresh_token_table": "oauth_refresh_tokens",
    "jti_table": "oauth_jti",
    "jwt_table": "oauth_jwt"
})


@dataclass(frozen=True)
class StorageConfig:
    """Maps each logical entity kind to its physical collection name."""
    collections: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_COLLECTIONS)

    @classmethod
    def from_mapping(
            cls, overrides: Optional[Mapping[str, str]] = None
    ) -> "StorageConfig":
        """
        Build a configuration from a (possibly partial) mapping of overrides.

        Kinds missing from `overrides` fall back to `DEFAULT_COLLECTIONS`. An
        unknown kind raises `ConfigurationError`.
        """
        overrides = dict(overrides or {})
        unknown = tuple(sorted(set(overrides) - set(DEFAULT_COLLECTIONS)))
        if bool(unknown):
            raise ConfigurationError(
                f"Unknown collection key(s): {', '.join(unknown)}. Expected "
                f"any of: {', '.join(DEFAULT_COLLECTIONS)}.")

        empty = tuple(key for key, name in overrides.items() if not bool(name))
        if bool(empty):
            raise ConfigurationError(
                f"Empty collection name given for: {', '.join(empty)}.")

        return cls(MappingProxyType({**DEFAULT_COLLECTIONS, **overrides}))

    def collection_name(self, key: str) -> str:
        """Return the collection name configured for the kind `key`."""
        return self.collections[key]
