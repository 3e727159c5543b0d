"""Exceptions for the OAuth2 storage adapter."""


class OAuth2StorageError(Exception):
    """
    Top-level error class for the storage adapter.

    Failures raised by the database driver are NOT wrapped in this class: they
    propagate to the caller unchanged.
    """
    error_code = 500


class ConfigurationError(OAuth2StorageError):
    """Raised when the storage settings are invalid."""
