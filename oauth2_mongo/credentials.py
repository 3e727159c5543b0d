"""
Salted one-way hashing of client secrets and user passwords.

The value hashed is always the identifier (client ID or username) followed by
the secret. Each hash carries its own random salt.
"""
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError


def __credentials__(identifier: str, secret: Optional[str]) -> str:
    return f"{identifier}{secret or ''}"


def encrypt_credentials(
        identifier: str,
        secret: Optional[str],
        hasher: PasswordHasher = PasswordHasher()
) -> str:
    """Hash the concatenation of `identifier` and `secret`."""
    return hasher.hash(__credentials__(identifier, secret))


def verify_credentials(
        identifier: str,
        secret: Optional[str],
        hashed: Optional[str],
        hasher: PasswordHasher = PasswordHasher()
) -> bool:
    """
    Check `identifier` and `secret` against the stored hash.

    Gives False when there is no stored hash, when the stored value is not an
    Argon2 hash (e.g. a legacy fixed-salt `crypt` hash) and when the
    credentials do not match.
    """
    if not bool(hashed):
        return False
    try:
        return hasher.verify(hashed, __credentials__(identifier, secret))
    except (VerificationError, InvalidHashError):
        return False
